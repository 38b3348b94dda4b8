"""
PropBind

把扁平的字符串键参数字典绑定到任意对象的标记字段上，
支持类型转换以及字段名称中的 ${var} 占位符

Example:
    from typing import Annotated
    from propbind import InjectProperty, Property, inject

    class Options:
        count: Annotated[int, InjectProperty("cnt")] = 0
        region: Property[str, "region.${env}"] = "local"

    options = Options()
    inject(options, {"cnt": "42", "env": "prod", "region.prod": "eu-west"})
"""

from loguru import logger as loguru_logger

from .core.decorators import InjectProperty, Property, injectable
from .core.inject import (
    InjectionOutcome,
    inject,
    inject_report,
    inject_settings,
    flatten_parameters
)
from .exceptions import (
    PropBindException,
    ConfigurationError,
    UnsupportedFieldTypeError,
    InvalidEnumValueError,
    ParameterSourceError
)
from .utils.converters import Long, MISSING

__all__ = [
    "InjectProperty",
    "Property",
    "injectable",
    "InjectionOutcome",
    "inject",
    "inject_report",
    "inject_settings",
    "flatten_parameters",
    "PropBindException",
    "ConfigurationError",
    "UnsupportedFieldTypeError",
    "InvalidEnumValueError",
    "ParameterSourceError",
    "Long",
    "MISSING",
]

# 库默认不输出日志，调用 setup_logging() 后开启
loguru_logger.disable("propbind")
