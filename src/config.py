"""
애플리케이션 설정 모듈

Pydantic Settings를 활용한 환경변수 기반 설정 관리
- 타입 검증 자동화
- .env 파일 지원
- 환경별 설정 분리
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# 프로젝트 루트 디렉토리 (src/config.py 기준으로 한 단계 상위)
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    애플리케이션 전역 설정

    환경변수 또는 .env 파일에서 값을 로드합니다.
    """

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    # ============================================
    # 애플리케이션 설정
    # ============================================
    app_name: str = Field(
        default="Commerce Search Filter API", description="애플리케이션 이름"
    )
    app_version: str = Field(default="0.1.0", description="애플리케이션 버전")
    debug: bool = Field(default=False, description="디버그 모드")
    environment: str = Field(default="development", description="실행 환경")
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:4502",
        ],
        description="CORS 허용 오리진 목록",
    )

    # ============================================
    # Magento GraphQL 설정
    # ============================================
    magento_graphql_endpoint: str = Field(
        default="",
        description="Magento GraphQL 엔드포인트 URL",
    )
    magento_store_code: str | None = Field(
        default=None,
        description="기본 스토어 코드 (Store 헤더로 전달)",
    )
    magento_request_timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="GraphQL 요청 타임아웃 (초)",
    )
    magento_filter_input_type: str = Field(
        default="ProductAttributeFilterInput",
        description="검색 필터 입력 타입 이름 (인트로스펙션 대상)",
    )
    magento_attribute_entity_type: str = Field(
        default="4",
        description="customAttributeMetadata 조회 시 사용할 엔티티 타입",
    )

    # ============================================
    # 필터 메타데이터 캐시 설정
    # ============================================
    filter_cache_ttl_seconds: int = Field(
        default=3600,
        ge=0,
        le=86400 * 7,
        description="필터 메타데이터 캐시 TTL (초, 0이면 만료 없음)",
    )
    filter_cache_degraded_results: bool = Field(
        default=False,
        description="원격 호출 실패로 축소된 결과도 캐시할지 여부",
    )

    # ============================================
    # 로깅 설정
    # ============================================
    log_level: str = Field(
        default="INFO",
        description="로깅 레벨",
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="로그 포맷",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """로그 레벨 유효성 검사"""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """환경 유효성 검사"""
        valid_envs = {"development", "staging", "production", "test"}
        lower_v = v.lower()
        if lower_v not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return lower_v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """CORS 오리진 목록 검증"""
        if "*" in v and len(v) > 1:
            raise ValueError(
                "CORS origins cannot mix wildcard '*' with specific origins. "
                "Use either '*' alone or specific origin URLs."
            )
        return v

    @field_validator("magento_graphql_endpoint")
    @classmethod
    def validate_graphql_endpoint(cls, v: str) -> str:
        """엔드포인트 URL 스킴 검증"""
        v = v.strip()
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(
                "magento_graphql_endpoint must be an http(s) URL"
            )
        return v

    @property
    def is_production(self) -> bool:
        """프로덕션 환경 여부"""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """개발 환경 여부"""
        return self.environment == "development"

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """프로덕션 환경 필수 설정 검증"""
        if self.environment == "production":
            if not self.magento_graphql_endpoint:
                raise ValueError(
                    "Production environment requires these settings: "
                    "magento_graphql_endpoint"
                )

            if self.magento_graphql_endpoint.startswith("http://"):
                logger.warning(
                    "magento_graphql_endpoint is not using TLS in production."
                )

            if self.filter_cache_degraded_results:
                logger.warning(
                    "FILTER_CACHE_DEGRADED_RESULTS is enabled in production. "
                    "Transient backend failures will be cached until the TTL expires."
                )

        return self


@lru_cache
def get_settings() -> Settings:
    """설정 싱글톤 인스턴스 반환"""
    return Settings()
