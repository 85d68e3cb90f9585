"""
InMemoryFilterAttributeMetadataCache 테스트
"""

from src.domain.types import FilterAttributeMetadata
from src.repositories.filter_metadata_cache import InMemoryFilterAttributeMetadataCache

COLOR = FilterAttributeMetadata(attribute_code="color", attribute_type="String")


class FakeClock:
    """수동으로 진행시키는 시계"""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestInMemoryCache:
    def test_empty_cache_returns_none(self):
        assert InMemoryFilterAttributeMetadataCache().get() is None

    def test_set_then_get(self):
        cache = InMemoryFilterAttributeMetadataCache()
        cache.set([COLOR])

        assert cache.get() == [COLOR]

    def test_empty_list_is_a_hit(self):
        """빈 목록도 캐시 항목으로 취급 (None과 구분)"""
        cache = InMemoryFilterAttributeMetadataCache()
        cache.set([])

        assert cache.get() == []

    def test_returned_list_is_a_copy(self):
        cache = InMemoryFilterAttributeMetadataCache()
        source = [COLOR]
        cache.set(source)

        source.append(COLOR)
        cache.get().clear()

        assert cache.get() == [COLOR]

    def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        cache = InMemoryFilterAttributeMetadataCache(ttl_seconds=60, clock=clock)
        cache.set([COLOR])

        clock.now += 60
        assert cache.get() == [COLOR]

        clock.now += 1
        assert cache.get() is None

    def test_zero_ttl_never_expires(self):
        clock = FakeClock()
        cache = InMemoryFilterAttributeMetadataCache(ttl_seconds=0, clock=clock)
        cache.set([COLOR])

        clock.now += 10**9

        assert cache.get() == [COLOR]

    def test_invalidate(self):
        cache = InMemoryFilterAttributeMetadataCache()
        cache.set([COLOR])

        cache.invalidate()

        assert cache.get() is None
