import functools
from typing import Any, BinaryIO

import anyio
from oss2.models import ListObjectsResult, PutObjectResult, RequestResult

from alioss.oss.client import AliOssClient
from alioss.oss.object_id import ExternalURL, ObjectID, generate_object_id, parse_object_id


class AsyncAliOssClient:
    """
    AliOssClient 的异步封装。

    oss2 是同步 SDK，每个调用通过 anyio.to_thread.run_sync 放到工作线程执行，
    不阻塞事件循环。异常与同步客户端一致，原样传递。
    """

    def __init__(self, client: AliOssClient):
        self.client = client

    @property
    def settings(self):
        return self.client.settings

    def generate_object_id(self, prefix_path: str, suffix: str = "") -> str:
        return generate_object_id(prefix_path, suffix)

    async def put_object(
        self,
        bucket_name: str,
        object_id: str | ObjectID,
        data: bytes | str | BinaryIO | Any,
        headers: dict[str, str] | None = None,
    ) -> PutObjectResult:
        return await anyio.to_thread.run_sync(
            functools.partial(self.client.put_object, bucket_name, object_id, data, headers=headers)
        )

    async def get_sign_url(
        self,
        bucket_name: str,
        object_id: str | ObjectID,
        *,
        expires: int | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> str:
        parsed = parse_object_id(object_id)
        if isinstance(parsed, ExternalURL):
            return parsed.url

        return await anyio.to_thread.run_sync(
            functools.partial(
                self.client.get_sign_url, bucket_name, parsed, expires=expires, headers=headers, params=params
            )
        )

    async def list_objects(
        self,
        bucket_name: str,
        prefix: str = "",
        delimiter: str = "",
        marker: str = "",
        max_keys: int = 100,
    ) -> ListObjectsResult:
        return await anyio.to_thread.run_sync(
            functools.partial(
                self.client.list_objects,
                bucket_name,
                prefix=prefix,
                delimiter=delimiter,
                marker=marker,
                max_keys=max_keys,
            )
        )

    async def delete_object(self, bucket_name: str, object_id: str | ObjectID) -> RequestResult:
        return await anyio.to_thread.run_sync(functools.partial(self.client.delete_object, bucket_name, object_id))
