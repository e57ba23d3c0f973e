"""
OSS 对象标识

带 oss:// 前缀的字符串表示本存储中的对象 (ManagedPath)，
其他字符串视为外部 URL (ExternalURL)，签名时原样返回。
"""

import posixpath
from dataclasses import dataclass

from alioss.toolkit.string import uuid_hex_token

OSS_PREFIX = "oss://"


@dataclass(frozen=True, slots=True)
class ManagedPath:
    """OSS 内的对象，key 不含 oss:// 前缀"""

    key: str

    def __str__(self) -> str:
        return OSS_PREFIX + self.key


@dataclass(frozen=True, slots=True)
class ExternalURL:
    """外部托管的地址，不做任何处理"""

    url: str

    def __str__(self) -> str:
        return self.url


ObjectID = ManagedPath | ExternalURL


def parse_object_id(value: "str | ObjectID") -> ObjectID:
    """
    在边界处把字符串转成 ManagedPath / ExternalURL。

    >>> parse_object_id("oss://a/b.png")
    ManagedPath(key='a/b.png')
    >>> parse_object_id("https://example.com/a.png")
    ExternalURL(url='https://example.com/a.png')
    """
    if isinstance(value, (ManagedPath, ExternalURL)):
        return value
    if value.startswith(OSS_PREFIX):
        return ManagedPath(value[len(OSS_PREFIX):])
    return ExternalURL(value)


def strip_prefix(value: "str | ObjectID") -> str:
    """返回传给 oss2 的 key：有 oss:// 前缀则去掉，否则原样返回"""
    object_id = parse_object_id(value)
    if isinstance(object_id, ManagedPath):
        return object_id.key
    return object_id.url


def is_managed(value: "str | ObjectID") -> bool:
    return isinstance(parse_object_id(value), ManagedPath)


def generate_object_id(prefix_path: str, suffix: str = "") -> str:
    """
    生成 oss://<prefix_path>/<uuid-hex>[.<suffix>] 形式的对象标识。

    - prefix_path 与随机串按 POSIX 路径拼接并规整，OSS key 不能以 '/' 开头，开头的 '/' 会被去掉
    - suffix 不以 '.' 开头时自动补 '.'，为空时不追加分隔符

    >>> generate_object_id("images/avatar", "png")  # doctest: +SKIP
    'oss://images/avatar/3f2b...9c1d.png'
    """
    path = posixpath.normpath(posixpath.join(prefix_path, uuid_hex_token())).lstrip("/")
    object_id = OSS_PREFIX + path
    if not suffix:
        return object_id

    if not suffix.startswith("."):
        object_id += "."
    return object_id + suffix
