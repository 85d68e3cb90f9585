"""
도메인 예외 정의

애플리케이션 전역에서 사용되는 커스텀 예외 클래스를 정의합니다.
"""


class CommerceFilterError(Exception):
    """커머스 필터 애플리케이션 기본 예외"""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ============================================
# GraphQL 클라이언트 관련 예외
# ============================================


class GraphqlClientError(CommerceFilterError):
    """GraphQL 클라이언트 관련 기본 예외"""

    def __init__(self, message: str, code: str = "GRAPHQL_CLIENT_ERROR"):
        super().__init__(message, code)


class GraphqlConnectionError(GraphqlClientError):
    """GraphQL 엔드포인트 연결 실패 (전송 오류, HTTP 오류 상태)"""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message, code="GRAPHQL_CONNECTION_ERROR")


class GraphqlResponseError(GraphqlClientError):
    """GraphQL 응답 형식 오류"""

    def __init__(self, message: str):
        super().__init__(message, code="GRAPHQL_RESPONSE_ERROR")


# ============================================
# 입력 검증 관련 예외
# ============================================


class ValidationError(CommerceFilterError):
    """입력 검증 실패"""

    def __init__(self, message: str, field: str = ""):
        self.field = field
        super().__init__(message, code="VALIDATION_ERROR")


# ============================================
# 설정 관련 예외
# ============================================


class ConfigurationError(CommerceFilterError):
    """설정 오류"""

    def __init__(self, message: str, config_key: str = ""):
        self.config_key = config_key
        super().__init__(message, code="CONFIGURATION_ERROR")
