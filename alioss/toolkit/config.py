"""
配置文件加载工具包

支持的配置文件格式：
- JSON (.json)
- YAML (.yaml, .yml)
- TOML (.toml)
"""

import json
import tomllib
from pathlib import Path
from typing import Any

import yaml


class ConfigLoader:
    """配置文件加载器"""

    @staticmethod
    def load(file_path: str | Path, encoding: str = "utf-8") -> dict[str, Any]:
        """
        自动根据文件扩展名加载配置文件

        Args:
            file_path: 配置文件路径
            encoding: 文件编码，默认 utf-8

        Returns:
            配置字典

        Raises:
            FileNotFoundError: 文件不存在
            ValueError: 不支持的文件格式，或文件内容不是映射
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"配置文件不存在: {path}")

        suffix = path.suffix.lower()

        if suffix == ".json":
            data = ConfigLoader.load_json(path, encoding)
        elif suffix in {".yaml", ".yml"}:
            data = ConfigLoader.load_yaml(path, encoding)
        elif suffix == ".toml":
            data = ConfigLoader.load_toml(path, encoding)
        else:
            raise ValueError(f"不支持的配置文件格式: {suffix}")

        if not isinstance(data, dict):
            raise ValueError(f"配置文件顶层必须是映射: {path}")
        return data

    @staticmethod
    def load_json(file_path: str | Path, encoding: str = "utf-8") -> Any:
        """加载 JSON 配置文件"""
        path = Path(file_path)
        content = path.read_text(encoding=encoding)
        return json.loads(content)

    @staticmethod
    def load_yaml(file_path: str | Path, encoding: str = "utf-8") -> dict[str, Any]:
        """加载 YAML 配置文件，空文件视为空映射"""
        path = Path(file_path)
        content = path.read_text(encoding=encoding)
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"YAML 解析失败: {path}: {e}") from e
        return data if data is not None else {}

    @staticmethod
    def load_toml(file_path: str | Path, encoding: str = "utf-8") -> dict[str, Any]:
        """加载 TOML 配置文件"""
        path = Path(file_path)
        content = path.read_bytes()
        return tomllib.loads(content.decode(encoding))


def get_section(config: dict[str, Any], *candidates: str) -> dict[str, Any]:
    """
    按顺序查找第一个存在的嵌套配置段，均不存在时返回整个配置。

    candidates 使用点号表示嵌套路径，例如 "trellis.alioss"。

    >>> get_section({"trellis": {"alioss": {"domain": "a"}}}, "trellis.alioss", "alioss")
    {'domain': 'a'}
    """
    for candidate in candidates:
        node: Any = config
        for part in candidate.split("."):
            if not isinstance(node, dict) or part not in node:
                break
            node = node[part]
        else:
            if isinstance(node, dict):
                return node
    return config


def load_config(file_path: str | Path, encoding: str = "utf-8") -> dict[str, Any]:
    """
    加载配置文件（便捷函数）
    """
    return ConfigLoader.load(file_path, encoding)
