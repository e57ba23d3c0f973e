from oss2.exceptions import OssError


class AliOssError(Exception):
    """alioss 自身抛出的异常基类"""


class ConfigurationError(AliOssError):
    """
    构造期错误：配置文件缺失、格式不支持、字段缺失或非法、凭证为空等。

    OSS 调用期的错误（网络、权限、NoSuchKey 等）不会被包装，
    直接以 oss2 抛出的 OssError 及其子类传递给调用方。
    """


__all__ = ["AliOssError", "ConfigurationError", "OssError"]
