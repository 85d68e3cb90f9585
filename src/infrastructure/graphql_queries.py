"""
Magento GraphQL 쿼리 정의 및 응답 파싱

책임:
- 필터 입력 타입 인트로스펙션 쿼리
- customAttributeMetadata 쿼리 조립
- 응답 data 섹션을 도메인 타입으로 변환
"""

import json
from collections.abc import Iterable
from typing import Any

from src.domain.exceptions import GraphqlResponseError
from src.domain.types import Attribute, InputField
from src.domain.validators import validate_entity_type, validate_graphql_name

DEFAULT_FILTER_INPUT_TYPE = "ProductAttributeFilterInput"

# Magento catalog_product 엔티티 타입 ID
DEFAULT_ATTRIBUTE_ENTITY_TYPE = "4"


def build_filter_introspection_query(
    type_name: str = DEFAULT_FILTER_INPUT_TYPE,
) -> str:
    """필터 입력 타입의 inputFields를 조회하는 인트로스펙션 쿼리"""
    safe_type = validate_graphql_name(type_name, "type_name")
    return (
        "query FilterIntrospection {"
        f' __type(name: "{safe_type}") {{'
        " inputFields { name type { name kind } }"
        " } }"
    )


FILTER_INTROSPECTION_QUERY = build_filter_introspection_query()


def build_attribute_metadata_query(
    attribute_codes: Iterable[str],
    entity_type: str = DEFAULT_ATTRIBUTE_ENTITY_TYPE,
) -> str:
    """
    발견된 필드 이름으로 customAttributeMetadata 일괄 조회 쿼리 조립

    Args:
        attribute_codes: 조회할 속성 코드 목록 (발견 순서)
        entity_type: 엔티티 타입 식별자

    Returns:
        GraphQL 쿼리 문자열

    Raises:
        ValueError: 속성 코드 또는 엔티티 타입이 유효하지 않은 경우
    """
    safe_entity_type = validate_entity_type(entity_type)
    inputs = []
    for code in attribute_codes:
        safe_code = validate_graphql_name(code, "attribute_code")
        inputs.append(
            f"{{attribute_code: {json.dumps(safe_code)}, "
            f"entity_type: {json.dumps(safe_entity_type)}}}"
        )

    return (
        "query AttributeMetadata {"
        f" customAttributeMetadata(attributes: [{', '.join(inputs)}]) {{"
        " items { attribute_code attribute_type input_type entity_type }"
        " } }"
    )


def _expect_list(value: Any, path: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise GraphqlResponseError(
            f"Expected a list at '{path}', got {type(value).__name__}"
        )
    return value


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise GraphqlResponseError(
            f"Expected an object at '{path}', got {type(value).__name__}"
        )
    return value


def parse_input_fields(data: dict[str, Any] | None) -> list[InputField]:
    """인트로스펙션 응답에서 InputField 목록 추출 (타입 미존재 시 빈 목록)"""
    type_section = _expect_dict((data or {}).get("__type"), "__type")
    items = _expect_list(type_section.get("inputFields"), "__type.inputFields")

    fields = []
    for item in items:
        if not isinstance(item, dict) or not item.get("name"):
            raise GraphqlResponseError("Input field entry without a name")
        fields.append(InputField.from_payload(item))
    return fields


def parse_attributes(data: dict[str, Any] | None) -> list[Attribute]:
    """customAttributeMetadata 응답에서 Attribute 목록 추출"""
    metadata = _expect_dict(
        (data or {}).get("customAttributeMetadata"), "customAttributeMetadata"
    )
    items = _expect_list(metadata.get("items"), "customAttributeMetadata.items")

    attributes = []
    for item in items:
        # Magento는 존재하지 않는 속성에 대해 null 항목을 반환할 수 있음
        if item is None:
            continue
        if not isinstance(item, dict) or not item.get("attribute_code"):
            raise GraphqlResponseError("Attribute entry without an attribute_code")
        attributes.append(Attribute.from_payload(item))
    return attributes
