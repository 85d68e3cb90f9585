"""
Domain Types

시스템 전반에서 사용되는 타입 정의
- GraphQL 응답 원본 형태는 TypedDict
- 도메인 모델은 불변 dataclass
"""

from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict

# =============================================================================
# GraphQL Payload Types (원본 응답 형태)
# =============================================================================


class TypeRefPayload(TypedDict, total=False):
    """인트로스펙션 타입 참조"""

    name: str | None
    kind: str


class InputFieldPayload(TypedDict, total=False):
    """__type.inputFields 항목"""

    name: str
    type: TypeRefPayload | None


class AttributePayload(TypedDict, total=False):
    """customAttributeMetadata.items 항목"""

    attribute_code: str
    attribute_type: str | None
    input_type: str | None
    entity_type: str | None


class GraphqlErrorPayload(TypedDict, total=False):
    """GraphQL errors 배열 항목"""

    message: str
    extensions: dict[str, Any]
    locations: list[dict[str, int]]
    path: list[str | int]


# =============================================================================
# Domain Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class InputField:
    """필터 입력 타입에서 발견된 필터 가능 속성"""

    name: str
    type_name: str | None = None

    @classmethod
    def from_payload(cls, payload: InputFieldPayload) -> "InputField":
        type_ref = payload.get("type") or {}
        return cls(name=payload["name"], type_name=type_ref.get("name"))


@dataclass(frozen=True, slots=True)
class Attribute:
    """백엔드가 보고한 속성 메타데이터"""

    attribute_code: str
    attribute_type: str | None = None
    input_type: str | None = None
    entity_type: str | None = None

    @classmethod
    def from_payload(cls, payload: AttributePayload) -> "Attribute":
        return cls(
            attribute_code=payload["attribute_code"],
            attribute_type=payload.get("attribute_type"),
            input_type=payload.get("input_type"),
            entity_type=payload.get("entity_type"),
        )


@dataclass(frozen=True, slots=True)
class FilterAttributeMetadata:
    """검색 UI가 사용하는 필터 속성 메타데이터"""

    attribute_code: str
    attribute_type: str | None = None
    filter_input_type: str | None = None
    attribute_input_type: str | None = None

    @property
    def is_resolved(self) -> bool:
        """백엔드 속성 메타데이터와 매칭되었는지 여부"""
        return self.attribute_type is not None


# =============================================================================
# GraphQL Response Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class GraphqlError:
    """GraphQL 에러 (메시지 + Magento 카테고리)"""

    message: str
    category: str | None = None

    @classmethod
    def from_payload(cls, payload: GraphqlErrorPayload) -> "GraphqlError":
        extensions = payload.get("extensions") or {}
        return cls(
            message=str(payload.get("message", "Unknown error")),
            category=extensions.get("category"),
        )


@dataclass(slots=True)
class GraphqlResponse:
    """GraphQL 응답 (data 또는 errors)"""

    data: dict[str, Any] | None = None
    errors: list[GraphqlError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


# =============================================================================
# Discovery Result Types
# =============================================================================

DiscoveryStage = Literal["introspection", "attribute_metadata"]
RecoverableErrorKind = Literal[
    "client_unavailable",
    "backend_error",
    "transport_error",
    "invalid_response",
]


@dataclass(frozen=True, slots=True)
class RecoverableError:
    """필터 탐색 중 삼켜진(로그만 남긴) 실패 정보"""

    stage: DiscoveryStage
    kind: RecoverableErrorKind
    message: str
    category: str | None = None


@dataclass(slots=True)
class FilterDiscoveryResult:
    """필터 탐색 결과 (값 + 복구 가능한 에러 목록)"""

    filters: list[FilterAttributeMetadata] = field(default_factory=list)
    errors: list[RecoverableError] = field(default_factory=list)
    from_cache: bool = False

    @property
    def degraded(self) -> bool:
        """원격 호출 실패로 결과가 축소되었는지 여부"""
        return bool(self.errors)


@dataclass(frozen=True, slots=True)
class CommerceContext:
    """
    원격 클라이언트가 바인딩되는 요청 컨텍스트

    store_code는 Magento Store 헤더로 전달되며,
    endpoint가 지정되면 설정의 엔드포인트 대신 사용됩니다.
    """

    store_code: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    endpoint: str | None = None
