"""
Repositories Package

데이터 접근 계층을 제공합니다.
"""

from src.repositories.filter_metadata_cache import (
    FilterAttributeMetadataCache,
    InMemoryFilterAttributeMetadataCache,
)

__all__ = [
    # Contract
    "FilterAttributeMetadataCache",
    # Implementations
    "InMemoryFilterAttributeMetadataCache",
]
