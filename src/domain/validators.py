"""
Domain Validators

GraphQL 쿼리 조립 시 사용되는 검증 유틸리티
"""

import re

# GraphQL Name 패턴 (https://spec.graphql.org/October2021/#Name)
GRAPHQL_NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")

# 엔티티 타입은 숫자 ID 또는 GraphQL 이름 형식만 허용
ENTITY_TYPE_PATTERN = re.compile(r"^[_0-9A-Za-z]+$")


def validate_graphql_name(value: str, field_name: str = "name") -> str:
    """
    GraphQL 이름(필드명, 타입명, 속성 코드) 검증

    Args:
        value: 검증할 이름
        field_name: 에러 메시지용 필드 이름

    Returns:
        검증된 이름 (원본과 동일)

    Raises:
        ValueError: 유효하지 않은 이름인 경우
    """
    if not value or not GRAPHQL_NAME_PATTERN.match(value):
        raise ValueError(
            f"Invalid {field_name}: '{value}'. "
            "Must start with a letter or underscore and contain only "
            "letters, digits and underscores."
        )
    return value


def validate_entity_type(value: str) -> str:
    """customAttributeMetadata 엔티티 타입 검증"""
    if not value or not ENTITY_TYPE_PATTERN.match(value):
        raise ValueError(f"Invalid entity_type: '{value}'")
    return value
