"""日志配置模块

使用 loguru 提供统一的日志记录功能。
"""

import os
import sys

from loguru import logger

# 格式：时间 | 级别 | 模块:行号 | 消息
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def set_level(level: str) -> None:
    """重新安装 stderr handler，切换日志级别

    Raises:
        ValueError: 未知的日志级别
    """
    level = str(level).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"无效的日志级别: {level}，可用: {', '.join(LOG_LEVELS)}")

    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=True)


# 移除默认的 handler，级别可通过环境变量覆盖，无效时回退到 INFO
_env_level = os.getenv("SUBTRACK_LOG_LEVEL", "INFO")
try:
    set_level(_env_level)
except ValueError as e:
    set_level("INFO")
    logger.warning(f"SUBTRACK_LOG_LEVEL 设置无效，使用 INFO: {e}")

__all__ = ["LOG_LEVELS", "logger", "set_level"]
