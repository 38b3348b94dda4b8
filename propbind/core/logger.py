"""
日志管理模块

基于 loguru 的日志管理，提供初始化配置功能
库内部统一使用 loguru_logger.bind(name=__name__)
"""

import os
import sys
from typing import Optional

from loguru import logger as loguru_logger

from .config import get_settings

logger = loguru_logger

_DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

_STD_FORMAT_TOKENS = {
    "%(asctime)s": "{time:YYYY-MM-DD HH:mm:ss}",
    "%(name)s": "{extra[name]}",
    "%(levelname)s": "{level: <8}",
    "%(message)s": "{message}",
    "%(filename)s": "{file.name}",
    "%(funcName)s": "{function}",
    "%(lineno)d": "{line}",
}


def _convert_format(user_format: str) -> str:
    """把标准 logging 格式转换为 loguru 格式"""
    for token, replacement in _STD_FORMAT_TOKENS.items():
        user_format = user_format.replace(token, replacement)
    return user_format


def setup_logging(config_file: Optional[str] = None) -> None:
    """
    根据配置初始化 loguru 日志系统

    读取 logging.level / logging.format / logging.json / logging.file

    Args:
        config_file: 配置文件路径，如果为 None 则使用默认配置
    """
    config = get_settings(config_file)

    loguru_logger.remove()
    loguru_logger.configure(extra={"name": "propbind"})
    loguru_logger.enable("propbind")

    log_level = str(config.get("logging.level", "WARNING")).upper()

    use_json = config.get("logging.json", False)
    if isinstance(use_json, str):
        use_json = use_json.lower() in ("true", "1", "yes", "on")

    if use_json:
        sink_kwargs = {"serialize": True, "level": log_level}
    else:
        user_format = config.get("logging.format", None)
        log_format = _convert_format(user_format) if user_format else _DEFAULT_FORMAT
        sink_kwargs = {"format": log_format, "level": log_level}

    loguru_logger.add(sys.stderr, colorize=not use_json, **sink_kwargs)

    log_file = config.get("logging.file")
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        loguru_logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            **sink_kwargs
        )


def get_logger(name: str = "propbind"):
    """
    获取绑定了名称的日志器

    Args:
        name: 日志器名称

    Returns:
        loguru Logger 实例
    """
    return loguru_logger.bind(name=name)
