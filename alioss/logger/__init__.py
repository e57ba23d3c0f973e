"""
alioss.logger - 统一的日志管理包

使用方式：
使用 init_logger() + logger 代理对象（延迟初始化）

使用示例:
    from alioss.logger import init_logger, logger

    # 在应用启动时初始化（可选）
    init_logger(level="DEBUG", log_format="json")

    # 之后在任何地方使用
    logger.info("client created")

未调用 init_logger() 时，logger 转发到 loguru 的默认 logger，且 alioss 自身的日志被禁用
(loguru.logger.disable)，不会写到宿主程序的 stderr。
"""
from datetime import UTC, time, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

import loguru

from alioss.logger.handler import LogFormat, LoggerHandler, RetentionType, RotationType
from alioss.toolkit.types import LazyProxy

if TYPE_CHECKING:
    from loguru import Logger

# 作为库被引用时默认静默，init_logger() 后才输出 alioss 的日志
LIBRARY_NAME = "alioss"

# 内部持有真实对象（延迟初始化）
_logger_manager: "LoggerHandler | None" = None
_logger: "Logger | None" = None


# --- Getter 函数 ---
def _get_logger() -> "Logger":
    if _logger is None:
        return loguru.logger
    return _logger


def _get_logger_manager() -> "LoggerHandler":
    if _logger_manager is None:
        raise RuntimeError("LoggerHandler not initialized. Call init_logger() first.")
    return _logger_manager


# --- 初始化函数 ---
def init_logger(
    *,
    level: str = "INFO",
    base_log_dir: Path | None = None,
    rotation: RotationType = time(0, 0, 0, tzinfo=UTC),
    retention: RetentionType = timedelta(days=30),
    compression: str | None = None,
    use_utc: bool = True,
    enqueue: bool = False,
    log_format: LogFormat | str = LogFormat.TEXT,
    write_to_file: bool = False,
    write_to_console: bool = True,
) -> "Logger":
    """
    初始化 Logger。

    :param level: 日志等级 (e.g., "INFO", "DEBUG")
    :param base_log_dir: 日志存放目录，仅 write_to_file=True 时使用
    :param rotation: 轮转策略 (默认: 每天 00:00, UTC时间)
    :param retention: 保留策略 (默认: 30天)
    :param compression: 压缩格式 (e.g., "zip")
    :param use_utc: 是否强制使用 UTC 时间
    :param enqueue: 是否使用多进程安全的队列写入
    :param log_format: 日志格式 (LogFormat.JSON 或 LogFormat.TEXT，默认 LogFormat.TEXT)
    :param write_to_file: 是否写入文件
    :param write_to_console: 是否输出到控制台 (stderr)
    :return: 初始化后的 Logger 实例
    """
    global _logger_manager, _logger

    _logger_manager = LoggerHandler(
        level=level,
        base_log_dir=base_log_dir,
        rotation=rotation,
        retention=retention,
        compression=compression,
        use_utc=use_utc,
        enqueue=enqueue,
        log_format=log_format,
    )
    loguru.logger.enable(LIBRARY_NAME)
    _logger = _logger_manager.setup(write_to_file=write_to_file, write_to_console=write_to_console)

    return _logger


def get_logger_manager() -> "LoggerHandler":
    """获取当前的 LoggerHandler 实例（需先调用 init_logger）"""
    return _get_logger_manager()


def reset_logger() -> None:
    """丢弃 init_logger 的配置并恢复库模式 (alioss 日志禁用)，主要用于测试"""
    global _logger_manager, _logger
    _logger_manager = None
    _logger = None
    loguru.logger.disable(LIBRARY_NAME)


# --- 导出代理对象 ---
logger: "Logger" = LazyProxy(_get_logger)  # type: ignore[assignment]

__all__ = [
    "LoggerHandler",
    "LogFormat",
    "RotationType",
    "RetentionType",
    "init_logger",
    "get_logger_manager",
    "reset_logger",
    "LIBRARY_NAME",
    "logger",
]
