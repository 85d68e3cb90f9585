"""
Commerce Search Filter API

FastAPI 애플리케이션 진입점
Magento GraphQL 검색 필터 탐색 + 캐싱 서비스
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import filters_router
from src.config import get_settings
from src.domain.exceptions import CommerceFilterError, ValidationError
from src.repositories.filter_metadata_cache import InMemoryFilterAttributeMetadataCache
from src.services.search_filter_service import SearchFilterService

# 로깅 설정
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format=settings.log_format,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    애플리케이션 라이프사이클 관리

    시작 시: 캐시 및 SearchFilterService 초기화
    종료 시: 캐시 정리
    """
    logger.info("Starting Commerce Search Filter API...")

    if not settings.magento_graphql_endpoint:
        logger.warning(
            "MAGENTO_GRAPHQL_ENDPOINT is not set. "
            "Filter discovery will return empty results."
        )

    filter_cache = InMemoryFilterAttributeMetadataCache(
        ttl_seconds=settings.filter_cache_ttl_seconds
    )
    search_filter_service = SearchFilterService(
        cache=filter_cache,
        settings=settings,
    )
    logger.info(
        f"SearchFilterService initialized "
        f"(cache_ttl={settings.filter_cache_ttl_seconds}s, "
        f"cache_degraded={settings.filter_cache_degraded_results})"
    )

    app.state.filter_cache = filter_cache
    app.state.search_filter_service = search_filter_service

    yield

    logger.info("Shutting down Commerce Search Filter API...")
    filter_cache.invalidate()


# FastAPI 앱 생성
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Magento GraphQL 검색 필터 속성 탐색 및 메타데이터 캐싱 API",
    lifespan=lifespan,
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Store", "X-Request-ID"],
)


# ============================================
# 글로벌 예외 핸들러
# ============================================


@app.exception_handler(ValidationError)
async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """입력 검증 실패 시 400 응답"""
    return JSONResponse(
        status_code=400,
        content={"detail": {"message": exc.message, "code": exc.code}},
    )


@app.exception_handler(CommerceFilterError)
async def commerce_filter_error_handler(
    request: Request, exc: CommerceFilterError
) -> JSONResponse:
    """기타 도메인 예외 시 500 응답"""
    if settings.is_production:
        logger.error(f"CommerceFilterError: {exc.code}")
    else:
        logger.error(f"CommerceFilterError: {exc.message}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": {"message": exc.message, "code": exc.code}},
    )


# 라우터 등록
app.include_router(filters_router)


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
