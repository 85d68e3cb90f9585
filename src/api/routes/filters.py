"""
Filter API Routes

검색 필터 탐색 관련 API 엔드포인트
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.schemas import (
    FilterAttributeMetadataSchema,
    FilterListResponse,
    HealthResponse,
    RecoverableErrorSchema,
)
from src.config import Settings, get_settings
from src.dependencies import get_commerce_context, get_search_filter_service
from src.domain.types import CommerceContext
from src.services.search_filter_service import SearchFilterService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["filters"])


# ============================================
# API 엔드포인트
# ============================================


@router.get("/filters", response_model=FilterListResponse)
async def list_filters(
    service: Annotated[SearchFilterService, Depends(get_search_filter_service)],
    context: Annotated[CommerceContext, Depends(get_commerce_context)],
    include_errors: Annotated[
        bool, Query(description="복구 가능한 에러 목록 포함 여부")
    ] = False,
) -> FilterListResponse:
    """
    사용 가능한 검색 필터 조회

    Magento 필터 입력 타입을 인트로스펙션하여 필터 가능한 속성과
    속성 메타데이터를 반환합니다. 백엔드 실패 시에도 오류 대신
    빈(축소된) 목록을 반환합니다.

    결과는 단일 캐시 슬롯에 저장되어 모든 호출자와 스토어가 공유합니다.
    따라서 고객 인증 헤더는 Magento로 전달되지 않으며, 스토어별로
    필터 스키마가 다르면 스토어마다 별도 인스턴스를 운영해야 합니다.
    """
    logger.info("Filter list requested (store=%s)", context.store_code)

    result = await service.discover_filters(context)

    return FilterListResponse(
        filters=[
            FilterAttributeMetadataSchema.model_validate(f) for f in result.filters
        ],
        count=len(result.filters),
        from_cache=result.from_cache,
        degraded=result.degraded,
        errors=(
            [RecoverableErrorSchema.model_validate(e) for e in result.errors]
            if include_errors
            else None
        ),
    )


@router.delete("/filters/cache", status_code=status.HTTP_204_NO_CONTENT)
async def invalidate_filter_cache(
    service: Annotated[SearchFilterService, Depends(get_search_filter_service)],
) -> Response:
    """필터 메타데이터 캐시 무효화"""
    service.invalidate_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/health", response_model=HealthResponse)
async def health(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """
    헬스체크

    서비스 상태와 GraphQL 엔드포인트 설정 여부를 확인합니다.
    """
    configured = bool(settings.magento_graphql_endpoint)
    return HealthResponse(
        status="healthy" if configured else "degraded",
        version=settings.app_version,
        graphql_endpoint_configured=configured,
    )
