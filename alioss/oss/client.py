from collections.abc import Callable
from pathlib import Path
from typing import Any, BinaryIO

import oss2
from oss2.models import ListObjectsResult, PutObjectResult, RequestResult

from alioss.config import AliOssSettings, load_settings
from alioss.exceptions import ConfigurationError
from alioss.logger import logger
from alioss.oss.base import BaseOSSClient
from alioss.oss.bucket_cache import BucketCache
from alioss.oss.object_id import ExternalURL, ObjectID, parse_object_id, strip_prefix

BucketFactory = Callable[[str], oss2.Bucket]


class AliOssClient(BaseOSSClient):
    """
    阿里云 OSS 客户端。

    每个操作的流程：规整对象标识 -> 从缓存取 (或创建) bucket 句柄 -> 调用 oss2。
    oss2 抛出的异常 (OssError 及其子类) 原样传递，不做重试和转换。

    可在多线程间共享：只有 bucket 缓存的读写是加锁的，网络 I/O 都在锁外进行。

    用法 ::

        >>> client = AliOssClient.from_file("configs/oss.yaml")
        >>> object_id = client.generate_object_id("avatars", "png")
        >>> client.put_object("my-bucket", object_id, b"...")
        >>> client.get_sign_url("my-bucket", object_id)
    """

    def __init__(self, settings: AliOssSettings, *, bucket_factory: BucketFactory | None = None):
        self.settings = settings
        self._auth = oss2.Auth(settings.access_id, settings.access_key.get_secret_value())
        # 所有 bucket 共用一个 Session (连接池)
        self._session = oss2.Session()
        self._bucket_factory = bucket_factory or self._open_bucket
        self._buckets: BucketCache[oss2.Bucket] = BucketCache()

        logger.info(
            f"AliOssClient created. Endpoint: {settings.endpoint_url} | Domain: {settings.domain or '-'} "
            f"| ExpireSeconds: {settings.expire_seconds}"
        )

    @classmethod
    def from_file(cls, file_path: str | Path, *, bucket_factory: BucketFactory | None = None) -> "AliOssClient":
        """从配置文件 (json / yaml / toml) 创建客户端"""
        return cls(load_settings(file_path), bucket_factory=bucket_factory)

    @classmethod
    def from_credentials(
        cls,
        access_id: str,
        access_key: str,
        endpoint: str,
        expire_seconds: int = 3600,
        domain: str = "",
        *,
        bucket_factory: BucketFactory | None = None,
    ) -> "AliOssClient":
        """直接用凭证创建客户端"""
        if not access_id or not access_key:
            raise ConfigurationError("Aliyun OSS requires access_id and access_key")

        settings = load_settings(
            endpoint=endpoint,
            access_id=access_id,
            access_key=access_key,
            expire_seconds=expire_seconds,
            domain=domain,
        )
        return cls(settings, bucket_factory=bucket_factory)

    def _open_bucket(self, bucket_name: str) -> oss2.Bucket:
        logger.debug(f"Opening bucket handle: {bucket_name}")
        return oss2.Bucket(
            self._auth,
            self.settings.endpoint_url,
            bucket_name,
            session=self._session,
            connect_timeout=self.settings.connect_timeout,
        )

    def get_bucket(self, bucket_name: str) -> oss2.Bucket:
        """获取 bucket 句柄，首次使用时创建并缓存"""
        return self._buckets.get_or_create(bucket_name, self._bucket_factory)

    def put_object(
        self,
        bucket_name: str,
        object_id: str | ObjectID,
        data: bytes | str | BinaryIO | Any,
        headers: dict[str, str] | None = None,
    ) -> PutObjectResult:
        """
        上传对象。data 可以是 bytes / str / 文件对象 / 可迭代对象，由 oss2 流式上传。
        """
        key = strip_prefix(object_id)
        bucket = self.get_bucket(bucket_name)
        logger.debug(f"PutObject: bucket={bucket_name}, key={key}")
        return bucket.put_object(key, data, headers=headers)

    def get_sign_url(
        self,
        bucket_name: str,
        object_id: str | ObjectID,
        *,
        expires: int | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> str:
        """
        生成带签名的 GET 下载地址。

        - 非 oss:// 标识视为外部 URL，原样返回，不签名
        - expires 默认使用配置中的 expire_seconds
        - headers / params 为需要参与签名的头部和查询参数，如 {"x-oss-process": "image/resize,w_100"}
        - 配置了 domain 时，URL 中的 <bucket>.<endpoint> 替换为该域名
        """
        parsed = parse_object_id(object_id)
        if isinstance(parsed, ExternalURL):
            return parsed.url

        bucket = self.get_bucket(bucket_name)
        expires = expires if expires is not None else self.settings.expire_seconds
        url = bucket.sign_url("GET", parsed.key, expires, headers=headers, params=params)

        if self.settings.domain:
            url = url.replace(f"{bucket_name}.{self.settings.endpoint_host}", self.settings.domain)
        return url

    def list_objects(
        self,
        bucket_name: str,
        prefix: str = "",
        delimiter: str = "",
        marker: str = "",
        max_keys: int = 100,
    ) -> ListObjectsResult:
        """
        单次列举，不做分页循环；需要完整列举时由调用方使用 next_marker 继续。
        """
        bucket = self.get_bucket(bucket_name)
        logger.debug(f"ListObjects: bucket={bucket_name}, prefix={prefix}, marker={marker}, max_keys={max_keys}")
        return bucket.list_objects(prefix=prefix, delimiter=delimiter, marker=marker, max_keys=max_keys)

    def delete_object(self, bucket_name: str, object_id: str | ObjectID) -> RequestResult:
        """删除对象。对象不存在时 OSS 同样返回成功"""
        key = strip_prefix(object_id)
        bucket = self.get_bucket(bucket_name)
        logger.debug(f"DeleteObject: bucket={bucket_name}, key={key}")
        return bucket.delete_object(key)
