"""
MagentoGraphqlClient 테스트

httpx.MockTransport로 Magento GraphQL 엔드포인트를 대체합니다.
"""

import json
import logging

import httpx
import pytest

from src.domain.exceptions import (
    ConfigurationError,
    GraphqlConnectionError,
    GraphqlResponseError,
    ValidationError,
)
from src.domain.types import CommerceContext, GraphqlError
from src.infrastructure.magento_graphql_client import MagentoGraphqlClient

ENDPOINT = "https://magento.test/graphql"


def _transport(status_code=200, body=None, captured=None, content=None):
    """요청을 기록하고 고정 응답을 반환하는 MockTransport"""

    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=body)

    return httpx.MockTransport(handler)


class TestExecute:
    """쿼리 실행"""

    async def test_posts_query_and_returns_data(self):
        captured = []
        client = MagentoGraphqlClient(
            ENDPOINT,
            store_code="default",
            headers={"Authorization": "Bearer token"},
            transport=_transport(body={"data": {"ok": True}}, captured=captured),
        )

        async with client:
            response = await client.execute("{ ok }")

        assert response.data == {"ok": True}
        assert response.has_errors is False
        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == ENDPOINT
        assert json.loads(request.content) == {"query": "{ ok }"}
        assert request.headers["Store"] == "default"
        assert request.headers["Authorization"] == "Bearer token"

    async def test_graphql_errors_are_returned_with_category(self):
        body = {
            "errors": [
                {
                    "message": "Field 'x' is not defined",
                    "extensions": {"category": "graphql"},
                },
                {"message": "No category"},
            ]
        }
        client = MagentoGraphqlClient(ENDPOINT, transport=_transport(body=body))

        async with client:
            response = await client.execute("{ x }")

        assert response.errors == [
            GraphqlError(message="Field 'x' is not defined", category="graphql"),
            GraphqlError(message="No category", category=None),
        ]

    async def test_error_status_with_errors_body_is_returned(self):
        body = {"errors": [{"message": "Internal", "extensions": {"category": "internal"}}]}
        client = MagentoGraphqlClient(
            ENDPOINT, transport=_transport(status_code=500, body=body)
        )

        async with client:
            response = await client.execute("{ x }")

        assert response.errors[0].category == "internal"

    async def test_error_status_without_errors_raises(self):
        client = MagentoGraphqlClient(
            ENDPOINT, transport=_transport(status_code=503, content=b"unavailable")
        )

        async with client:
            with pytest.raises(GraphqlConnectionError) as exc_info:
                await client.execute("{ x }")

        assert exc_info.value.status_code == 503

    async def test_non_json_body_raises_response_error(self):
        client = MagentoGraphqlClient(ENDPOINT, transport=_transport(content=b"<html>"))

        async with client:
            with pytest.raises(GraphqlResponseError):
                await client.execute("{ x }")

    async def test_body_without_data_or_errors_raises(self):
        client = MagentoGraphqlClient(ENDPOINT, transport=_transport(body={}))

        async with client:
            with pytest.raises(GraphqlResponseError):
                await client.execute("{ x }")

    async def test_transport_failure_raises_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = MagentoGraphqlClient(ENDPOINT, transport=httpx.MockTransport(handler))

        async with client:
            with pytest.raises(GraphqlConnectionError):
                await client.execute("{ x }")


class TestModes:
    """인트로스펙션/일반 모드 분리"""

    async def test_introspection_client_runs_introspection(self):
        client = MagentoGraphqlClient(
            ENDPOINT,
            introspection=True,
            transport=_transport(body={"data": {"__type": None}}),
        )

        async with client:
            response = await client.execute_introspection("{ __type(name: \"X\") { name } }")

        assert response.data == {"__type": None}

    async def test_introspection_client_rejects_data_query(self):
        client = MagentoGraphqlClient(
            ENDPOINT, introspection=True, transport=_transport(body={"data": {}})
        )

        async with client:
            with pytest.raises(ValidationError):
                await client.execute("{ products { total_count } }")

    async def test_standard_client_rejects_introspection(self):
        client = MagentoGraphqlClient(ENDPOINT, transport=_transport(body={"data": {}}))

        async with client:
            with pytest.raises(ValidationError):
                await client.execute_introspection("{ __schema { types { name } } }")


class TestLifecycle:
    async def test_close_is_idempotent(self):
        client = MagentoGraphqlClient(ENDPOINT, transport=_transport(body={"data": {}}))

        await client.close()
        await client.close()

        with pytest.raises(GraphqlConnectionError):
            await client.execute("{ x }")


class TestCreate:
    """컨텍스트 기반 팩토리"""

    def test_constructor_requires_endpoint(self):
        with pytest.raises(ConfigurationError) as exc_info:
            MagentoGraphqlClient("")

        assert exc_info.value.config_key == "magento_graphql_endpoint"
        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_returns_none_without_endpoint(self, mock_settings, caplog):
        """엔드포인트 미설정 시 ConfigurationError를 로그로 남기고 None 반환"""
        mock_settings.magento_graphql_endpoint = ""

        with caplog.at_level(logging.ERROR):
            client = MagentoGraphqlClient.create(CommerceContext(), settings=mock_settings)

        assert client is None
        assert "No Magento GraphQL endpoint configured" in caplog.text
        assert "magento_graphql_endpoint" in caplog.text

    async def test_binds_context_store_code(self, mock_settings):
        client = MagentoGraphqlClient.create(
            CommerceContext(store_code="fr"), introspection=True, settings=mock_settings
        )

        assert client is not None
        assert client.is_introspection is True
        assert client.store_code == "fr"
        await client.close()

    async def test_falls_back_to_settings_store_code(self, mock_settings):
        client = MagentoGraphqlClient.create(CommerceContext(), settings=mock_settings)

        assert client.store_code == "default"
        assert client.is_introspection is False
        await client.close()

    async def test_context_endpoint_overrides_settings(self, mock_settings):
        captured = []
        mock_settings.magento_graphql_endpoint = ""
        client = MagentoGraphqlClient.create(
            CommerceContext(endpoint="https://other.test/graphql"),
            settings=mock_settings,
            transport=_transport(body={"data": {}}, captured=captured),
        )

        async with client:
            await client.execute("{ x }")

        assert str(captured[0].url) == "https://other.test/graphql"
