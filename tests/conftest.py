"""
Pytest 配置文件 (conftest.py)

提供测试运行所需的共享 fixtures。

主要功能：
1. 隔离环境变量 (ALIOSS_*) 与日志配置
2. 提供内存版 bucket (FakeBucket)，替代真实 OSS 服务
3. 提供已接入 FakeBucket 的客户端
4. 配置 anyio 后端
"""

import os
import time
from collections.abc import Generator
from types import SimpleNamespace
from typing import Any

import oss2
import pytest
from loguru import logger as loguru_logger

from alioss.config import AliOssSettings
from alioss.logger import reset_logger
from alioss.oss import AliOssClient

TEST_ENDPOINT = "oss-cn.aliyuncs.com"
TEST_BUCKET = "mybucket"


# ==========================================
# 1. 内存版 Bucket
# ==========================================


class FakeBucket(oss2.Bucket):
    """
    内存版 oss2.Bucket。

    put / list / delete 在内存中完成；sign_url 继承自 oss2.Bucket，
    签名在本地计算，不需要网络。
    可通过 fail_with 注入任意 OssError，模拟服务端错误。
    """

    def __init__(self, auth, endpoint, bucket_name):
        super().__init__(auth, endpoint, bucket_name)
        self.objects: dict[str, bytes] = {}
        self.fail_with: Exception | None = None

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _read_all(data: Any) -> bytes:
        if isinstance(data, bytes):
            return data
        if isinstance(data, str):
            return data.encode("utf-8")
        if hasattr(data, "read"):
            return data.read()
        return b"".join(data)

    def put_object(self, key, data, headers=None, progress_callback=None):
        self._maybe_fail()
        self.objects[key] = self._read_all(data)
        return SimpleNamespace(status=200, etag=f"etag-{len(self.objects[key])}", headers=headers)

    def list_objects(self, prefix="", delimiter="", marker="", max_keys=100, headers=None):
        self._maybe_fail()
        keys = sorted(k for k in self.objects if k.startswith(prefix) and k > marker)
        page = keys[:max_keys]
        object_list = [
            SimpleNamespace(key=k, size=len(self.objects[k]), last_modified=int(time.time()), etag=f"etag-{k}")
            for k in page
        ]
        is_truncated = len(keys) > max_keys
        return SimpleNamespace(
            object_list=object_list,
            prefix_list=[],
            is_truncated=is_truncated,
            next_marker=page[-1] if is_truncated else "",
        )

    def delete_object(self, key, params=None, headers=None):
        self._maybe_fail()
        self.objects.pop(key, None)
        return SimpleNamespace(status=204)


def make_oss_error(error_cls: type[oss2.exceptions.OssError], status: int, code: str, message: str = ""):
    """构造 oss2 的服务端异常"""
    return error_cls(status, {"x-oss-request-id": "test-request-id"}, b"", {"Code": code, "Message": message})


# ==========================================
# 2. 环境隔离
# ==========================================


@pytest.fixture(autouse=True)
def clean_alioss_env(monkeypatch: pytest.MonkeyPatch):
    """清除外部环境中的 ALIOSS_* 变量，避免影响配置加载"""
    for key in list(os.environ):
        if key.upper().startswith("ALIOSS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """每个测试后移除 loguru sink 并丢弃 init_logger 的配置"""
    yield
    loguru_logger.remove()
    reset_logger()


@pytest.fixture
def anyio_backend():
    """配置 anyio 后端为 asyncio"""
    return "asyncio"


# ==========================================
# 3. 客户端 Fixtures
# ==========================================


@pytest.fixture
def settings() -> AliOssSettings:
    return AliOssSettings(
        endpoint=TEST_ENDPOINT,
        access_id="test-access-id",
        access_key="test-access-key",
        expire_seconds=600,
    )


@pytest.fixture
def fake_buckets() -> dict[str, FakeBucket]:
    """bucket 名 -> FakeBucket，跨句柄共享同一份数据"""
    return {}


@pytest.fixture
def factory_calls() -> list[str]:
    """记录 bucket_factory 被调用的 bucket 名"""
    return []


@pytest.fixture
def bucket_factory(settings, fake_buckets, factory_calls):
    auth = oss2.Auth(settings.access_id, settings.access_key.get_secret_value())

    def _factory(name: str) -> FakeBucket:
        factory_calls.append(name)
        if name not in fake_buckets:
            fake_buckets[name] = FakeBucket(auth, settings.endpoint_url, name)
        return fake_buckets[name]

    return _factory


@pytest.fixture
def client(settings, bucket_factory) -> AliOssClient:
    return AliOssClient(settings, bucket_factory=bucket_factory)
