"""
FilterAttributeMetadataConverter - 발견된 필드 + 속성 메타데이터 병합

속성 목록을 attribute_code 기준 맵으로 한 번 구성한 뒤
발견된 필드마다 코드로 조회합니다 (응답 순서에 의존하지 않음).
"""

import logging
from collections.abc import Iterable

from src.domain.types import Attribute, FilterAttributeMetadata, InputField

logger = logging.getLogger(__name__)


class FilterAttributeMetadataConverter:
    """InputField -> FilterAttributeMetadata 변환기"""

    def __init__(self, attributes: Iterable[Attribute]):
        self._attributes_by_code: dict[str, Attribute] = {}
        for attribute in attributes:
            # 중복 코드는 첫 항목 우선
            self._attributes_by_code.setdefault(attribute.attribute_code, attribute)

    def __call__(self, input_field: InputField) -> FilterAttributeMetadata:
        attribute = self._attributes_by_code.get(input_field.name)

        if attribute is None:
            logger.warning(
                f"No attribute metadata found for filter field '{input_field.name}'"
            )
            return FilterAttributeMetadata(
                attribute_code=input_field.name,
                filter_input_type=input_field.type_name,
            )

        return FilterAttributeMetadata(
            attribute_code=input_field.name,
            attribute_type=attribute.attribute_type,
            filter_input_type=input_field.type_name,
            attribute_input_type=attribute.input_type,
        )

    def convert_all(
        self, input_fields: Iterable[InputField]
    ) -> list[FilterAttributeMetadata]:
        """발견 순서대로 일괄 변환 (입력 필드당 정확히 한 건)"""
        return [self(input_field) for input_field in input_fields]
