from alioss.oss.async_client import AsyncAliOssClient
from alioss.oss.base import BaseOSSClient
from alioss.oss.bucket_cache import BucketCache
from alioss.oss.client import AliOssClient, BucketFactory
from alioss.oss.object_id import (
    OSS_PREFIX,
    ExternalURL,
    ManagedPath,
    ObjectID,
    generate_object_id,
    is_managed,
    parse_object_id,
    strip_prefix,
)

__all__ = [
    "OSS_PREFIX",
    "AliOssClient",
    "AsyncAliOssClient",
    "BaseOSSClient",
    "BucketCache",
    "BucketFactory",
    "ExternalURL",
    "ManagedPath",
    "ObjectID",
    "generate_object_id",
    "is_managed",
    "parse_object_id",
    "strip_prefix",
]
