import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from alioss.oss.bucket_cache import BucketCache


class Handle:
    def __init__(self, name: str):
        self.name = name


class TestBucketCache:
    """测试 bucket 句柄缓存"""

    def test_get_miss_returns_none(self):
        cache: BucketCache[Handle] = BucketCache()
        assert cache.get("nope") is None
        assert "nope" not in cache
        assert len(cache) == 0

    def test_set_then_get(self):
        cache: BucketCache[Handle] = BucketCache()
        handle = Handle("a")
        cache.set("a", handle)
        assert cache.get("a") is handle
        assert "a" in cache
        assert cache.names() == ["a"]

    def test_get_or_create_reuses_handle(self):
        cache: BucketCache[Handle] = BucketCache()
        calls: list[str] = []

        def factory(name: str) -> Handle:
            calls.append(name)
            return Handle(name)

        first = cache.get_or_create("a", factory)
        second = cache.get_or_create("a", factory)
        assert first is second
        assert calls == ["a"]

    def test_factory_error_not_cached(self):
        cache: BucketCache[Handle] = BucketCache()

        def broken(name: str) -> Handle:
            raise ValueError(f"cannot open {name}")

        with pytest.raises(ValueError, match="cannot open a"):
            cache.get_or_create("a", broken)
        assert "a" not in cache

        assert cache.get_or_create("a", Handle).name == "a"

    def test_concurrent_access(self):
        """多线程并发查找与写入不会破坏缓存，也不会返回未写入过的 bucket"""
        cache: BucketCache[Handle] = BucketCache()
        names = [f"bucket-{i}" for i in range(20)]
        bad: list[str] = []
        start = threading.Barrier(16, timeout=5)

        def worker(i: int):
            start.wait()
            for n in range(500):
                name = names[(i + n) % len(names)]
                handle = cache.get_or_create(name, Handle)
                if handle.name != name:
                    bad.append(name)
                if cache.get("never-inserted") is not None:
                    bad.append("never-inserted")

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(worker, range(16)))

        assert bad == []
        assert sorted(cache.names()) == sorted(names)
        assert len(cache) == len(names)
        for name in names:
            assert cache.get(name).name == name
