from collections.abc import Callable
from typing import Generic, TypeVar

from alioss.logger import logger
from alioss.toolkit.rwlock import ReadWriteLock

T = TypeVar("T")


class BucketCache(Generic[T]):
    """
    bucket 名 -> bucket 句柄 的缓存，由读写锁保护。

    - 首次使用时创建，之后复用；不淘汰，无 TTL，生命周期与所属客户端一致
    - 查找持读锁，互不阻塞；写入持写锁，与所有读写互斥
    - 句柄的创建在锁外进行：并发首次访问同一 bucket 时可能创建多次，后写入者覆盖，
      要求句柄的构造是廉价且无副作用的 (oss2.Bucket 的构造不发起网络请求)
    """

    def __init__(self):
        self._lock = ReadWriteLock()
        self._handles: dict[str, T] = {}

    def get(self, name: str) -> T | None:
        """返回已缓存的句柄，未命中返回 None"""
        with self._lock.read_lock():
            return self._handles.get(name)

    def set(self, name: str, handle: T) -> None:
        with self._lock.write_lock():
            self._handles[name] = handle

    def get_or_create(self, name: str, factory: Callable[[str], T]) -> T:
        """
        命中直接返回；未命中时在锁外调用 factory(name) 创建并写入缓存。
        factory 抛出的异常原样传递，且不会写入缓存。
        """
        handle = self.get(name)
        if handle is not None:
            return handle

        handle = factory(name)
        self.set(name, handle)
        logger.debug(f"Bucket handle cached: {name}")
        return handle

    def names(self) -> list[str]:
        with self._lock.read_lock():
            return list(self._handles)

    def __contains__(self, name: object) -> bool:
        with self._lock.read_lock():
            return name in self._handles

    def __len__(self) -> int:
        with self._lock.read_lock():
            return len(self._handles)
