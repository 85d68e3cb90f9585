"""
FastAPI 의존성 주입 모듈

FastAPI의 Depends 패턴을 활용한 의존성 주입을 관리합니다.

의존성 흐름:
    Settings -> Cache Repository -> SearchFilterService
"""

import logging

from fastapi import Request

from src.domain.types import CommerceContext
from src.infrastructure.magento_graphql_client import STORE_HEADER
from src.services.search_filter_service import SearchFilterService

logger = logging.getLogger(__name__)

# Magento로 전달할 요청 헤더
# 필터 목록은 단일 캐시 슬롯으로 모든 호출자가 공유하므로 고객별 헤더(Authorization)는 제외
FORWARDED_HEADERS = ("Content-Currency",)


# ============================================
# Service 의존성
# ============================================


def get_search_filter_service(request: Request) -> SearchFilterService:
    """SearchFilterService 의존성 주입"""
    return request.app.state.search_filter_service


# ============================================
# 요청 컨텍스트 의존성
# ============================================


def get_commerce_context(request: Request) -> CommerceContext:
    """
    현재 요청의 커머스 컨텍스트 구성

    Store 헤더 -> 스토어 코드, 그 외 허용된 헤더는 Magento로 전달합니다.
    """
    headers = {
        name: request.headers[name]
        for name in FORWARDED_HEADERS
        if name in request.headers
    }
    return CommerceContext(
        store_code=request.headers.get(STORE_HEADER) or None,
        headers=headers,
    )
