"""
属性注入入口

把扁平的字符串键参数字典注入到任意对象的标记字段中
"""

from typing import Any, List, Mapping, Optional, Tuple

from .field import FieldInjector, InjectionOutcome
from .registry import get_registry


def inject(target: Any, parameters: Mapping[str, Any]) -> None:
    """
    从参数字典注入目标对象的字段

    每个字段的缺失数据与转换失败都被静默忽略；只有首次发现类型时的
    字段类型错误会抛出

    Args:
        target: 目标对象，按其运行时类型查找注入器
        parameters: 参数字典，只读，不会被复制或保存

    Raises:
        UnsupportedFieldTypeError: 目标类型中存在不支持的字段类型
    """
    for injector in get_registry().get_injectors(type(target)):
        injector.inject(target, parameters)


def inject_report(
    target: Any,
    parameters: Mapping[str, Any]
) -> List[Tuple[FieldInjector, InjectionOutcome]]:
    """与 inject 相同，但返回每个字段的注入结果"""
    return [
        (injector, injector.inject(target, parameters))
        for injector in get_registry().get_injectors(type(target))
    ]


def flatten_parameters(mapping: Mapping[str, Any], sep: str = ".") -> dict:
    """
    把嵌套字典展开为点号分隔的扁平字典

    嵌套的字典本身也保留在自己的键下，接口类型（如 Mapping）的字段可以直接接收整段配置

    Example:
        {"server": {"port": 80}} -> {"server": {"port": 80}, "server.port": 80}
    """
    result = {}

    def walk(prefix: str, value: Any) -> None:
        if prefix:
            result[prefix] = value
        if isinstance(value, Mapping):
            for key, item in value.items():
                walk(f"{prefix}{sep}{key}" if prefix else str(key), item)

    walk("", mapping)
    return result


def inject_settings(target: Any, settings: Optional[Any] = None) -> None:
    """
    从配置注入目标对象

    Args:
        target: 目标对象
        settings: Dynaconf 实例或嵌套字典；为 None 时使用全局配置。
                  Dynaconf 本身支持点号键查找，直接作为参数字典使用
    """
    if settings is None:
        from ..config import get_settings
        settings = get_settings()

    if isinstance(settings, Mapping):
        settings = flatten_parameters(settings)
    inject(target, settings)
