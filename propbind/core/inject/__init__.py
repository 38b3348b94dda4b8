"""
属性注入模块

发现类的可注入字段、缓存注入器并把参数字典写入目标对象
"""

from .field import (
    FieldHandle,
    FieldInjector,
    FieldKind,
    InjectionOutcome,
    classify_type,
    convert
)
from .registry import InjectorRegistry, get_registry
from .injector import inject, inject_report, inject_settings, flatten_parameters

__all__ = [
    'FieldHandle',
    'FieldInjector',
    'FieldKind',
    'InjectionOutcome',
    'classify_type',
    'convert',
    'InjectorRegistry',
    'get_registry',
    'inject',
    'inject_report',
    'inject_settings',
    'flatten_parameters',
]
