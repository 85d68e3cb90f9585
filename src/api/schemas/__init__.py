"""
API Schemas Package
"""

from src.api.schemas.filters import (
    FilterAttributeMetadataSchema,
    FilterListResponse,
    HealthResponse,
    RecoverableErrorSchema,
)

__all__ = [
    "FilterAttributeMetadataSchema",
    "FilterListResponse",
    "HealthResponse",
    "RecoverableErrorSchema",
]
