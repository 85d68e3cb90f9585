"""
Filter Attribute Metadata Cache - 필터 메타데이터 단일 슬롯 캐시

책임:
- 계산된 필터 메타데이터 목록 저장/조회 (TTL 기반)
- 캐시 무효화
"""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from src.domain.types import FilterAttributeMetadata

logger = logging.getLogger(__name__)


class FilterAttributeMetadataCache(ABC):
    """필터 메타데이터 캐시 계약 (인스턴스당 단일 슬롯)"""

    @abstractmethod
    def get(self) -> list[FilterAttributeMetadata] | None:
        """캐시된 목록 반환 (없거나 만료되면 None)"""

    @abstractmethod
    def set(self, filters: Sequence[FilterAttributeMetadata]) -> None:
        """목록 저장"""

    @abstractmethod
    def invalidate(self) -> None:
        """캐시 무효화"""


class InMemoryFilterAttributeMetadataCache(FilterAttributeMetadataCache):
    """
    프로세스 메모리 TTL 캐시

    저장 시 tuple로 복사하고 조회 시 새 list를 반환하므로
    호출자가 반환값을 수정해도 캐시 항목은 변하지 않습니다.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: tuple[FilterAttributeMetadata, ...] | None = None
        self._stored_at: float = 0.0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def _is_expired(self) -> bool:
        if self._ttl_seconds <= 0:
            return False
        return (self._clock() - self._stored_at) > self._ttl_seconds

    def get(self) -> list[FilterAttributeMetadata] | None:
        if self._entry is None:
            logger.debug("Filter metadata cache miss")
            return None

        if self._is_expired():
            logger.debug("Filter metadata cache entry expired")
            self.invalidate()
            return None

        logger.debug(f"Filter metadata cache hit ({len(self._entry)} entries)")
        return list(self._entry)

    def set(self, filters: Sequence[FilterAttributeMetadata]) -> None:
        self._entry = tuple(filters)
        self._stored_at = self._clock()
        logger.debug(f"Filter metadata cached ({len(self._entry)} entries)")

    def invalidate(self) -> None:
        self._entry = None
        self._stored_at = 0.0
        logger.debug("Filter metadata cache invalidated")
