"""
FilterAttributeMetadataConverter 테스트
"""

import logging

from src.domain.types import Attribute, FilterAttributeMetadata, InputField
from src.services.attribute_converter import FilterAttributeMetadataConverter


class TestConverter:
    """코드 기준 매칭 변환"""

    def test_converts_matching_attribute(self):
        converter = FilterAttributeMetadataConverter(
            [Attribute(attribute_code="color", attribute_type="String", input_type="select")]
        )

        result = converter(InputField(name="color", type_name="FilterEqualTypeInput"))

        assert result == FilterAttributeMetadata(
            attribute_code="color",
            attribute_type="String",
            filter_input_type="FilterEqualTypeInput",
            attribute_input_type="select",
        )

    def test_lookup_ignores_attribute_order(self):
        """속성 목록 순서와 무관하게 필드 순서를 유지"""
        converter = FilterAttributeMetadataConverter(
            [
                Attribute(attribute_code="price", attribute_type="Float", input_type="price"),
                Attribute(attribute_code="name", attribute_type="String", input_type="text"),
            ]
        )

        result = converter.convert_all(
            [InputField(name="name"), InputField(name="price")]
        )

        assert [(r.attribute_code, r.attribute_input_type) for r in result] == [
            ("name", "text"),
            ("price", "price"),
        ]

    def test_miss_returns_degraded_record(self, caplog):
        """매칭 실패 시 예외 없이 축소된 레코드 반환 + 경고 로그"""
        converter = FilterAttributeMetadataConverter([])

        with caplog.at_level(logging.WARNING):
            result = converter(InputField(name="material", type_name="FilterMatchTypeInput"))

        assert result.attribute_code == "material"
        assert result.attribute_type is None
        assert result.attribute_input_type is None
        assert result.filter_input_type == "FilterMatchTypeInput"
        assert "material" in caplog.text

    def test_convert_all_preserves_length(self):
        converter = FilterAttributeMetadataConverter(
            [Attribute(attribute_code="color", attribute_type="String", input_type="select")]
        )

        result = converter.convert_all(
            [InputField(name="color"), InputField(name="size"), InputField(name="sku")]
        )

        assert len(result) == 3
        assert [r.is_resolved for r in result] == [True, False, False]

    def test_duplicate_codes_first_wins(self):
        converter = FilterAttributeMetadataConverter(
            [
                Attribute(attribute_code="color", attribute_type="String", input_type="select"),
                Attribute(attribute_code="color", attribute_type="Int", input_type="text"),
            ]
        )

        assert converter(InputField(name="color")).attribute_type == "String"
