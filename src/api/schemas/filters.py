"""
Filter API Schemas

필터 탐색 API 응답 스키마 정의
"""

from pydantic import BaseModel, ConfigDict, Field


class FilterAttributeMetadataSchema(BaseModel):
    """필터 속성 메타데이터"""

    model_config = ConfigDict(from_attributes=True)

    attribute_code: str = Field(description="속성 코드", examples=["color"])
    attribute_type: str | None = Field(
        default=None, description="속성 데이터 타입", examples=["String"]
    )
    filter_input_type: str | None = Field(
        default=None,
        description="필터 입력 타입",
        examples=["FilterEqualTypeInput"],
    )
    attribute_input_type: str | None = Field(
        default=None, description="속성 입력 방식", examples=["select"]
    )


class RecoverableErrorSchema(BaseModel):
    """탐색 중 발생한 복구 가능한 에러"""

    model_config = ConfigDict(from_attributes=True)

    stage: str = Field(description="실패 단계")
    kind: str = Field(description="실패 종류")
    message: str = Field(description="에러 메시지")
    category: str | None = Field(default=None, description="Magento 에러 카테고리")


class FilterListResponse(BaseModel):
    """필터 목록 응답"""

    filters: list[FilterAttributeMetadataSchema] = Field(
        default=[], description="사용 가능한 필터 목록"
    )
    count: int = Field(default=0, description="필터 수")
    from_cache: bool = Field(default=False, description="캐시 결과 여부")
    degraded: bool = Field(default=False, description="원격 호출 실패로 축소된 결과 여부")
    errors: list[RecoverableErrorSchema] | None = Field(
        default=None, description="복구 가능한 에러 목록 (include_errors=true일 때)"
    )


class HealthResponse(BaseModel):
    """헬스체크 응답"""

    status: str = Field(description="서비스 상태")
    version: str = Field(description="API 버전")
    graphql_endpoint_configured: bool = Field(
        description="Magento GraphQL 엔드포인트 설정 여부"
    )
