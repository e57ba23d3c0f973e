from abc import ABC, abstractmethod
from typing import Any, BinaryIO

from alioss.oss.object_id import ObjectID, generate_object_id


class BaseOSSClient(ABC):
    """对象存储客户端接口"""

    def generate_object_id(self, prefix_path: str, suffix: str = "") -> str:
        """生成 oss://<prefix_path>/<uuid-hex>[.<suffix>] 形式的对象标识"""
        return generate_object_id(prefix_path, suffix)

    @abstractmethod
    def put_object(
        self,
        bucket_name: str,
        object_id: str | ObjectID,
        data: bytes | str | BinaryIO | Any,
        headers: dict[str, str] | None = None,
    ) -> Any:
        pass

    @abstractmethod
    def get_sign_url(
        self,
        bucket_name: str,
        object_id: str | ObjectID,
        *,
        expires: int | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> str:
        pass

    @abstractmethod
    def list_objects(
        self,
        bucket_name: str,
        prefix: str = "",
        delimiter: str = "",
        marker: str = "",
        max_keys: int = 100,
    ) -> Any:
        pass

    @abstractmethod
    def delete_object(self, bucket_name: str, object_id: str | ObjectID) -> Any:
        pass
