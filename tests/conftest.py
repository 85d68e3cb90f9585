"""
Test Configuration

테스트 공통 fixture 정의 — 모든 외부 의존성을 mock으로 대체합니다.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.config import Settings
from src.domain.types import CommerceContext, GraphqlResponse
from src.repositories.filter_metadata_cache import InMemoryFilterAttributeMetadataCache


@pytest.fixture
def mock_settings():
    """테스트용 Settings mock"""
    settings = MagicMock(spec=Settings)
    settings.app_name = "Commerce Search Filter Test"
    settings.app_version = "0.1.0"
    settings.environment = "test"
    settings.magento_graphql_endpoint = "https://magento.test/graphql"
    settings.magento_store_code = "default"
    settings.magento_request_timeout = 5.0
    settings.magento_filter_input_type = "ProductAttributeFilterInput"
    settings.magento_attribute_entity_type = "4"
    settings.filter_cache_ttl_seconds = 3600
    settings.filter_cache_degraded_results = False
    settings.log_level = "DEBUG"
    settings.log_format = "%(message)s"
    settings.cors_origins = ["http://localhost:3000"]
    settings.is_production = False
    settings.is_development = False
    return settings


@pytest.fixture
def commerce_context():
    """기본 스토어 요청 컨텍스트"""
    return CommerceContext(store_code="default")


@pytest.fixture
def filter_cache():
    """실제 인메모리 캐시 (TTL 비활성)"""
    return InMemoryFilterAttributeMetadataCache(ttl_seconds=0)


@pytest.fixture
def introspection_payload():
    """color, size 두 필드를 가진 인트로스펙션 응답 data"""
    return {
        "__type": {
            "inputFields": [
                {"name": "color", "type": {"name": "FilterEqualTypeInput"}},
                {"name": "size", "type": {"name": "FilterEqualTypeInput"}},
            ]
        }
    }


@pytest.fixture
def attribute_payload():
    """color, size 속성 메타데이터 응답 data"""
    return {
        "customAttributeMetadata": {
            "items": [
                {
                    "attribute_code": "color",
                    "attribute_type": "STRING",
                    "input_type": "select",
                },
                {
                    "attribute_code": "size",
                    "attribute_type": "STRING",
                    "input_type": "select",
                },
            ]
        }
    }


@pytest.fixture
def introspection_client(introspection_payload):
    """인트로스펙션용 MagentoGraphqlClient mock"""
    client = AsyncMock()
    client.execute_introspection.return_value = GraphqlResponse(
        data=introspection_payload
    )
    return client


@pytest.fixture
def metadata_client(attribute_payload):
    """속성 메타데이터 조회용 MagentoGraphqlClient mock"""
    client = AsyncMock()
    client.execute.return_value = GraphqlResponse(data=attribute_payload)
    return client


@pytest.fixture
def client_factory(introspection_client, metadata_client):
    """introspection 플래그에 따라 mock 클라이언트를 반환하는 팩토리"""

    def _create(context, introspection):
        return introspection_client if introspection else metadata_client

    return MagicMock(side_effect=_create)
