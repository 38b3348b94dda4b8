"""
核心模块

包含字段标记、注入引擎、配置与日志
"""

from .config import (
    get_settings,
    get_config,
    load_parameters,
    reload_config
)
from .decorators import InjectProperty, Property, find_marker, injectable
from .inject import (
    FieldInjector,
    InjectionOutcome,
    InjectorRegistry,
    get_registry,
    inject,
    inject_report,
    inject_settings,
    flatten_parameters
)
from .logger import get_logger, logger, setup_logging

__all__ = [
    "get_settings",
    "get_config",
    "load_parameters",
    "reload_config",
    "InjectProperty",
    "Property",
    "find_marker",
    "injectable",
    "FieldInjector",
    "InjectionOutcome",
    "InjectorRegistry",
    "get_registry",
    "inject",
    "inject_report",
    "inject_settings",
    "flatten_parameters",
    "get_logger",
    "logger",
    "setup_logging",
]
