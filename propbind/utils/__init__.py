"""
工具函数模块

包含标量转换等公共工具
"""

from .converters import (
    Long,
    MISSING,
    to_int,
    to_long,
    to_bool,
    to_string
)

__all__ = [
    "Long",
    "MISSING",
    "to_int",
    "to_long",
    "to_bool",
    "to_string",
]
