#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PropBind CLI 工具

查看类的可注入字段，并用配置文件或命令行参数试注入
"""

import importlib
import json
import sys
from typing import Any, Dict, Optional

import click

from .core.config import load_parameters
from .core.inject import get_registry, inject_report
from .exceptions import PropBindException
from .utils.converters import to_string


class _LayeredParameters:
    """命令行参数优先，其次是配置文件"""

    def __init__(self, overrides: Dict[str, str], settings: Optional[Any] = None):
        self.overrides = overrides
        self.settings = settings

    def get(self, key: str, default: Any = None) -> Any:
        if key in self.overrides:
            return self.overrides[key]
        if self.settings is not None:
            return self.settings.get(key, default)
        return default


def _load_class(target: str) -> type:
    """按 module:Class 导入目标类"""
    module_name, _, class_name = target.partition(':')
    if not module_name or not class_name:
        raise click.BadParameter(f"目标格式应为 module:Class，实际为 '{target}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"无法导入模块 '{module_name}': {e}")

    obj = module
    for part in class_name.split('.'):
        obj = getattr(obj, part, None)
        if obj is None:
            raise click.BadParameter(f"模块 '{module_name}' 中没有 '{class_name}'")
    if not isinstance(obj, type):
        raise click.BadParameter(f"'{target}' 不是类")
    return obj


def _parse_overrides(pairs) -> Dict[str, str]:
    overrides = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"参数格式应为 key=value，实际为 '{pair}'")
        overrides[key] = value
    return overrides


def _json_default(value: Any) -> Any:
    return to_string(value, None)


@click.group()
def cli():
    """PropBind 命令行工具 - 字段注入调试"""
    pass


@cli.command()
@click.argument('target')
def describe(target: str):
    """列出 TARGET (module:Class) 的可注入字段"""
    cls = _load_class(target)

    try:
        injectors = get_registry().get_injectors(cls)
    except PropBindException as e:
        click.echo(f"❌ {e.message}", err=True)
        sys.exit(1)

    if not injectors:
        click.echo(f"{cls.__qualname__} 没有可注入字段")
        return

    for injector in injectors:
        placeholder = injector.placeholder if injector.is_dynamic else '-'
        click.echo(
            f"{injector.field.owner.__qualname__}.{injector.field.name}\t"
            f"{injector.name}\t{placeholder}\t{injector.kind.value}"
        )


@cli.command(name='inject')
@click.argument('target')
@click.option('--config', '-c', 'source', default=None, help='参数文件路径或 URL')
@click.option('--param', '-p', 'pairs', multiple=True, help='key=value 形式的参数，可重复')
def inject_command(target: str, source: Optional[str], pairs):
    """实例化 TARGET (module:Class) 并注入参数，输出字段值"""
    cls = _load_class(target)
    overrides = _parse_overrides(pairs)

    try:
        instance = cls()
    except TypeError as e:
        # 目标类需要构造参数
        click.echo(f"❌ 无法实例化 {cls.__qualname__}: {e}", err=True)
        sys.exit(1)

    try:
        settings = load_parameters(source) if source else None
        report = inject_report(instance, _LayeredParameters(overrides, settings))
    except PropBindException as e:
        click.echo(f"❌ {e.message}", err=True)
        sys.exit(1)

    result = {}
    for injector, outcome in report:
        result[injector.field.name] = {
            'value': injector.field.read(instance, None),
            'outcome': outcome.value,
        }
    click.echo(json.dumps(result, ensure_ascii=False, indent=2, default=_json_default))


if __name__ == '__main__':
    cli()
