"""
Magento GraphQL 비동기 클라이언트 래퍼

책임:
- httpx 기반 GraphQL POST 요청
- 요청 컨텍스트(스토어 코드, 헤더) 바인딩
- 인트로스펙션/일반 쿼리 모드 분리
- 전송/응답 오류를 도메인 예외로 변환
- 리소스 정리 (graceful shutdown)
"""

import logging
from typing import Any
from urllib.parse import urlparse, urlunparse

import httpx

from src.config import Settings, get_settings
from src.domain.exceptions import (
    ConfigurationError,
    GraphqlConnectionError,
    GraphqlResponseError,
    ValidationError,
)
from src.domain.types import CommerceContext, GraphqlError, GraphqlResponse

logger = logging.getLogger(__name__)

STORE_HEADER = "Store"


def _sanitize_uri(uri: str) -> str:
    """URI에서 인증 정보 제거 (로깅용)"""
    try:
        parsed = urlparse(uri)
        if parsed.password or parsed.username:
            netloc = f"***@{parsed.hostname}"
            if parsed.port:
                netloc += f":{parsed.port}"
            return urlunparse(parsed._replace(netloc=netloc))
    except ValueError:
        return uri.split("@")[-1] if "@" in uri else uri
    return uri


def _parse_response_body(body: Any) -> GraphqlResponse:
    """GraphQL 응답 본문을 GraphqlResponse로 변환"""
    if not isinstance(body, dict):
        raise GraphqlResponseError(
            f"GraphQL response must be a JSON object, got {type(body).__name__}"
        )

    raw_errors = body.get("errors") or []
    if not isinstance(raw_errors, list):
        raise GraphqlResponseError("GraphQL 'errors' must be a list")

    errors = [
        GraphqlError.from_payload(err)
        if isinstance(err, dict)
        else GraphqlError(message=str(err))
        for err in raw_errors
    ]

    data = body.get("data")
    if data is not None and not isinstance(data, dict):
        raise GraphqlResponseError("GraphQL 'data' must be an object")

    if data is None and not errors:
        raise GraphqlResponseError("GraphQL response carries neither data nor errors")

    return GraphqlResponse(data=data, errors=errors)


class MagentoGraphqlClient:
    """
    Magento GraphQL 비동기 클라이언트

    introspection=True로 생성된 클라이언트는 인트로스펙션 쿼리만,
    False로 생성된 클라이언트는 일반 쿼리만 실행합니다.
    """

    def __init__(
        self,
        endpoint: str,
        introspection: bool = False,
        store_code: str | None = None,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not endpoint:
            raise ConfigurationError(
                "GraphQL endpoint is required", config_key="magento_graphql_endpoint"
            )

        self._endpoint = endpoint
        self._introspection = introspection
        self._store_code = store_code

        request_headers = {"Accept": "application/json"}
        request_headers.update(headers or {})
        if store_code:
            request_headers[STORE_HEADER] = store_code

        self._http: httpx.AsyncClient | None = httpx.AsyncClient(
            headers=request_headers,
            timeout=timeout,
            transport=transport,
        )

        logger.debug(
            f"MagentoGraphqlClient initialized: endpoint={_sanitize_uri(endpoint)}, "
            f"store={store_code}, introspection={introspection}"
        )

    @classmethod
    def create(
        cls,
        context: CommerceContext,
        introspection: bool = False,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "MagentoGraphqlClient | None":
        """
        요청 컨텍스트에 바인딩된 클라이언트 생성

        Args:
            context: 스토어 코드/헤더/엔드포인트를 담은 요청 컨텍스트
            introspection: 인트로스펙션 전용 클라이언트 여부
            settings: 설정 (None이면 전역 설정 사용)
            transport: httpx 전송 계층 (테스트용)

        Returns:
            클라이언트 (생성 불가 시 None)
        """
        settings = settings or get_settings()
        try:
            return cls(
                endpoint=context.endpoint or settings.magento_graphql_endpoint,
                introspection=introspection,
                store_code=context.store_code or settings.magento_store_code,
                headers=context.headers,
                timeout=settings.magento_request_timeout,
                transport=transport,
            )
        except ConfigurationError as e:
            logger.error(
                f"No Magento GraphQL endpoint configured, unable to create client "
                f"({e.config_key})."
            )
            return None
        except Exception as e:
            logger.error(f"Failed to create Magento GraphQL client: {e}")
            return None

    @property
    def is_introspection(self) -> bool:
        return self._introspection

    @property
    def store_code(self) -> str | None:
        return self._store_code

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
            logger.debug("Magento GraphQL HTTP client closed")

    async def __aenter__(self) -> "MagentoGraphqlClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        await self.close()

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            raise GraphqlConnectionError("Magento GraphQL client is already closed.")
        return self._http

    async def execute(self, query: str) -> GraphqlResponse:
        """일반 GraphQL 쿼리 실행"""
        if self._introspection:
            raise ValidationError(
                "Introspection client cannot execute data queries", field="query"
            )
        return await self._post(query)

    async def execute_introspection(self, query: str) -> GraphqlResponse:
        """인트로스펙션 쿼리 실행"""
        if not self._introspection:
            raise ValidationError(
                "Client was not created for introspection queries", field="query"
            )
        return await self._post(query)

    async def _post(self, query: str) -> GraphqlResponse:
        try:
            response = await self.http.post(self._endpoint, json={"query": query})
        except httpx.HTTPError as e:
            logger.error(f"GraphQL request failed: {e}")
            raise GraphqlConnectionError(
                f"Failed to reach {_sanitize_uri(self._endpoint)}: {e}"
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            if response.is_error:
                raise GraphqlConnectionError(
                    f"GraphQL endpoint returned HTTP {response.status_code}",
                    status_code=response.status_code,
                ) from e
            raise GraphqlResponseError(f"Response is not valid JSON: {e}") from e

        # Magento은 일부 오류를 4xx/5xx + errors 본문으로 반환
        if response.is_error and not (isinstance(body, dict) and body.get("errors")):
            raise GraphqlConnectionError(
                f"GraphQL endpoint returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        result = _parse_response_body(body)
        logger.debug(
            f"GraphQL request completed: status={response.status_code}, "
            f"errors={len(result.errors)}"
        )
        return result
