"""
alioss - 阿里云 OSS 的轻量客户端

    >>> from alioss import AliOssClient
    >>> client = AliOssClient.from_file("configs/oss.yaml")
"""

import loguru

from alioss.config import AliOssSettings, load_settings
from alioss.exceptions import AliOssError, ConfigurationError, OssError
from alioss.logger import LIBRARY_NAME
from alioss.oss import (
    OSS_PREFIX,
    AliOssClient,
    AsyncAliOssClient,
    BaseOSSClient,
    ExternalURL,
    ManagedPath,
    generate_object_id,
    parse_object_id,
    strip_prefix,
)

__version__ = "0.1.0"

# 库模式：宿主程序调用 init_logger() 之前不输出 alioss 的日志
loguru.logger.disable(LIBRARY_NAME)

__all__ = [
    "OSS_PREFIX",
    "AliOssClient",
    "AliOssError",
    "AliOssSettings",
    "AsyncAliOssClient",
    "BaseOSSClient",
    "ConfigurationError",
    "ExternalURL",
    "ManagedPath",
    "OssError",
    "generate_object_id",
    "load_settings",
    "parse_object_id",
    "strip_prefix",
]
