from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from alioss.exceptions import ConfigurationError
from alioss.logger import logger
from alioss.toolkit.config import get_section, load_config
from alioss.toolkit.string import ensure_scheme, strip_scheme

# 配置文件中 OSS 配置段的查找顺序，均不存在时使用整个文件
CONFIG_SECTIONS = ("trellis.alioss", "alioss")


class AliOssSettings(BaseSettings):
    """
    阿里云 OSS 客户端配置。

    取值优先级：显式参数 > 环境变量 (ALIOSS_*) > 默认值。
    构造后不可修改。
    """

    endpoint: str
    access_id: str
    access_key: SecretStr
    domain: str = ""  # 签名 URL 中替换 <bucket>.<endpoint> 的自定义域名 (CDN)
    expire_seconds: int = Field(default=3600, gt=0)
    connect_timeout: float | None = None

    model_config = SettingsConfigDict(
        env_prefix="ALIOSS_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def accept_end_point(cls, data: Any) -> Any:
        """兼容配置文件中的 end_point 写法"""
        if isinstance(data, dict) and "end_point" in data and "endpoint" not in data:
            data = dict(data)
            data["endpoint"] = data.pop("end_point")
        return data

    @field_validator("endpoint", "access_id", mode="after")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("access_key", mode="after")
    @classmethod
    def secret_not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("domain", mode="after")
    @classmethod
    def normalize_domain(cls, v: str) -> str:
        """只保留主机部分，签名 URL 的协议不变"""
        return strip_scheme(v.strip())

    @property
    def endpoint_url(self) -> str:
        """带协议的 endpoint，传给 oss2"""
        return ensure_scheme(self.endpoint)

    @property
    def endpoint_host(self) -> str:
        """不带协议的 endpoint，用于自定义域名替换"""
        return strip_scheme(self.endpoint)


def load_settings(file_path: str | Path | None = None, **overrides: Any) -> AliOssSettings:
    """
    加载 OSS 配置

    加载顺序：
    1. 有 file_path 时按后缀读取配置文件，取 trellis.alioss / alioss 配置段
    2. overrides 覆盖文件中的同名字段
    3. 其余字段由环境变量 (ALIOSS_*) 和默认值补齐

    Raises:
        ConfigurationError: 文件缺失、格式不支持或字段校验失败
    """
    values: dict[str, Any] = {}
    if file_path is not None:
        try:
            values = dict(get_section(load_config(file_path), *CONFIG_SECTIONS))
        except (OSError, ValueError) as e:
            logger.critical(f"Failed to read OSS config file {file_path}: {e}")
            raise ConfigurationError(str(e)) from e
        logger.debug(f"Loaded OSS config from {file_path}, keys: {sorted(values)}")

    if "end_point" in values:
        values.setdefault("endpoint", values.pop("end_point"))
    values.update(overrides)

    try:
        return AliOssSettings(**values)
    except ValidationError as e:
        logger.critical(f"Invalid OSS configuration: {e}")
        raise ConfigurationError(f"Invalid OSS configuration: {e}") from e
