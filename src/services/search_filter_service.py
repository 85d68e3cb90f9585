"""
SearchFilterService - 검색 필터 탐색 + 캐싱

흐름:
    캐시 조회 -> (미스) 인트로스펙션 -> 속성 메타데이터 조회 -> 변환 -> 캐시 저장

원격 호출 실패는 모두 로그로 남기고 빈 결과로 축소합니다.
호출자에게 예외를 전파하지 않으며, 실패 내역은 FilterDiscoveryResult.errors로 제공합니다.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import partial

from src.config import Settings
from src.domain.exceptions import GraphqlClientError, GraphqlResponseError
from src.domain.types import (
    Attribute,
    CommerceContext,
    DiscoveryStage,
    FilterAttributeMetadata,
    FilterDiscoveryResult,
    GraphqlResponse,
    InputField,
    RecoverableError,
    RecoverableErrorKind,
)
from src.infrastructure.graphql_queries import (
    build_attribute_metadata_query,
    build_filter_introspection_query,
    parse_attributes,
    parse_input_fields,
)
from src.infrastructure.magento_graphql_client import MagentoGraphqlClient
from src.repositories.filter_metadata_cache import FilterAttributeMetadataCache
from src.services.attribute_converter import FilterAttributeMetadataConverter

logger = logging.getLogger(__name__)

ClientFactory = Callable[[CommerceContext, bool], MagentoGraphqlClient | None]


class SearchFilterService:
    """
    검색 필터 탐색 서비스

    캐시 미스 시 채우기 작업은 asyncio.Lock으로 보호되어
    동시에 들어온 요청이 원격 호출을 한 번만 수행합니다.
    """

    def __init__(
        self,
        cache: FilterAttributeMetadataCache,
        settings: Settings,
        client_factory: ClientFactory | None = None,
    ):
        self._cache = cache
        self._settings = settings
        self._client_factory: ClientFactory = client_factory or partial(
            MagentoGraphqlClient.create, settings=settings
        )
        self._introspection_query = build_filter_introspection_query(
            settings.magento_filter_input_type
        )
        self._entity_type = settings.magento_attribute_entity_type
        self._fill_lock = asyncio.Lock()

    async def retrieve_currently_available_filters(
        self, context: CommerceContext
    ) -> list[FilterAttributeMetadata]:
        """현재 사용 가능한 필터 목록 (실패 시 빈 목록, 예외 없음)"""
        result = await self.discover_filters(context)
        return result.filters

    async def discover_filters(self, context: CommerceContext) -> FilterDiscoveryResult:
        """필터 탐색 (캐시 우선, 복구 가능한 에러 목록 포함)"""
        cached = self._cache.get()
        if cached is not None:
            return FilterDiscoveryResult(filters=cached, from_cache=True)

        async with self._fill_lock:
            cached = self._cache.get()
            if cached is not None:
                logger.debug("Using cached filters (populated by another task)")
                return FilterDiscoveryResult(filters=cached, from_cache=True)

            result = await self._compute_filters(context)

            if not result.degraded or self._settings.filter_cache_degraded_results:
                self._cache.set(result.filters)
            else:
                logger.warning(
                    f"Filter discovery degraded ({len(result.errors)} errors), "
                    "result not cached"
                )

            return result

    def invalidate_cache(self) -> None:
        """필터 메타데이터 캐시 무효화"""
        self._cache.invalidate()
        logger.info("Search filter cache invalidated")

    async def _compute_filters(self, context: CommerceContext) -> FilterDiscoveryResult:
        errors: list[RecoverableError] = []

        # 먼저 Magento에서 필터 가능한 필드를 조회
        available_filters = await self._fetch_available_search_filters(context, errors)
        if not available_filters:
            return FilterDiscoveryResult(filters=[], errors=errors)

        attributes = await self._fetch_attribute_metadata(
            context, available_filters, errors
        )
        if attributes is None:
            return FilterDiscoveryResult(filters=[], errors=errors)

        converter = FilterAttributeMetadataConverter(attributes)
        filters = converter.convert_all(available_filters)
        logger.info(
            f"Discovered {len(filters)} search filters "
            f"({sum(1 for f in filters if f.is_resolved)} with attribute metadata)"
        )
        return FilterDiscoveryResult(filters=filters, errors=errors)

    async def _fetch_available_search_filters(
        self,
        context: CommerceContext,
        errors: list[RecoverableError],
    ) -> list[InputField] | None:
        """인트로스펙션으로 필터 입력 타입의 필드 목록 조회 (실패 시 None)"""
        client = self._client_factory(context, True)
        if client is None:
            logger.error(
                "MagentoGraphQL client is null, unable to make introspection call "
                "to fetch available filter attributes."
            )
            errors.append(
                RecoverableError(
                    stage="introspection",
                    kind="client_unavailable",
                    message="Magento GraphQL client unavailable",
                )
            )
            return None

        async with client:
            response = await self._run(
                "introspection",
                client.execute_introspection(self._introspection_query),
                errors,
            )
        if response is None:
            return None

        try:
            return parse_input_fields(response.data)
        except GraphqlResponseError as e:
            self._record_failure("introspection", "invalid_response", e, errors)
            return None

    async def _fetch_attribute_metadata(
        self,
        context: CommerceContext,
        available_filters: list[InputField],
        errors: list[RecoverableError],
    ) -> list[Attribute] | None:
        """발견된 필드의 속성 메타데이터를 한 번의 쿼리로 조회 (실패 시 None)"""
        try:
            query = build_attribute_metadata_query(
                (input_field.name for input_field in available_filters),
                entity_type=self._entity_type,
            )
        except ValueError as e:
            self._record_failure("attribute_metadata", "invalid_response", e, errors)
            return None

        client = self._client_factory(context, False)
        if client is None:
            logger.error(
                "MagentoGraphQL client is null, unable to make query to fetch "
                "attribute metadata."
            )
            errors.append(
                RecoverableError(
                    stage="attribute_metadata",
                    kind="client_unavailable",
                    message="Magento GraphQL client unavailable",
                )
            )
            return None

        async with client:
            response = await self._run(
                "attribute_metadata", client.execute(query), errors
            )
        if response is None:
            return None

        try:
            return parse_attributes(response.data)
        except GraphqlResponseError as e:
            self._record_failure("attribute_metadata", "invalid_response", e, errors)
            return None

    async def _run(
        self,
        stage: DiscoveryStage,
        call: Awaitable[GraphqlResponse],
        errors: list[RecoverableError],
    ) -> GraphqlResponse | None:
        """원격 호출 실행 - 전송 오류/백엔드 에러는 기록 후 None"""
        try:
            response = await call
        except GraphqlResponseError as e:
            self._record_failure(stage, "invalid_response", e, errors)
            return None
        except GraphqlClientError as e:
            self._record_failure(stage, "transport_error", e, errors)
            return None

        if response.has_errors:
            # 에러가 있으면 모두 로그로 남기고 안전한 빈 값 반환
            for err in response.errors:
                logger.error(f"An error has occurred: {err.message} ({err.category})")
                errors.append(
                    RecoverableError(
                        stage=stage,
                        kind="backend_error",
                        message=err.message,
                        category=err.category,
                    )
                )
            return None

        return response

    @staticmethod
    def _record_failure(
        stage: DiscoveryStage,
        kind: RecoverableErrorKind,
        error: Exception,
        errors: list[RecoverableError],
    ) -> None:
        logger.error(f"Filter discovery {stage} failed: {error}")
        errors.append(RecoverableError(stage=stage, kind=kind, message=str(error)))
