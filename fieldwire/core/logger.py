"""
日志管理模块

基于 loguru 的日志管理，提供初始化配置功能
所有代码可以直接使用: from loguru import logger
"""

import os
import sys
from typing import Optional

from loguru import logger as loguru_logger

from .config import get_config_bool, get_config_str, get_settings

logger = loguru_logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# 标准 logging 格式到 loguru 格式的映射
_LOGGING_FORMAT_MAP = {
    "%(asctime)s": "{time:YYYY-MM-DD HH:mm:ss}",
    "%(name)s": "{name}",
    "%(levelname)s": "{level: <8}",
    "%(message)s": "{message}",
    "%(filename)s": "{file.name}",
    "%(funcName)s": "{function}",
    "%(lineno)d": "{line}",
}


def _convert_format(user_format: str) -> str:
    """将标准 logging 格式转换为 loguru 格式"""
    for source, target in _LOGGING_FORMAT_MAP.items():
        user_format = user_format.replace(source, target)
    return user_format


def setup_logging(config_file: Optional[str] = None, sink=None) -> None:
    """
    根据配置文件初始化 loguru 日志系统

    Args:
        config_file: 配置文件路径，如果为 None 则使用默认配置
        sink: 控制台输出目标，默认为 sys.stdout
    """
    config = get_settings(config_file)

    # 移除默认的 handler
    loguru_logger.remove()

    log_level = get_config_str("logging.level", "INFO").upper()
    use_json = get_config_bool("logging.json", False)

    common_kwargs = {
        "level": log_level,
        "backtrace": True,
        "diagnose": True,
    }

    if use_json:
        # JSON 格式不需要 format 参数
        common_kwargs["serialize"] = True
        console_kwargs = dict(common_kwargs)
    else:
        user_format = get_config_str("logging.format", "")
        log_format = _convert_format(user_format) if user_format else DEFAULT_FORMAT
        common_kwargs["format"] = log_format
        console_kwargs = dict(common_kwargs, colorize=sink is None)

    loguru_logger.add(sink if sink is not None else sys.stdout, **console_kwargs)

    # 如果有文件日志配置，添加文件 handler
    log_file = config.get("logging.file")
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        loguru_logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            **common_kwargs
        )


def get_logger(name: str = "fieldwire"):
    """
    获取绑定名称的日志器实例

    Args:
        name: 日志器名称（通过 bind 绑定到 extra 中）

    Returns:
        loguru Logger 实例
    """
    return loguru_logger.bind(name=name)
