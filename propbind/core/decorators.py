"""
装饰器与字段标记模块

用类型注解声明需要自动注入的字段，不要求目标类继承任何基类

Example:
    class ServerOptions:
        port: Annotated[int, InjectProperty("server.${env}.port")] = 8080
        debug: Property[bool, "debug"] = False
"""

from typing import Annotated, Any, Optional, Tuple, get_args, get_origin

from ..exceptions import ConfigurationError


class InjectProperty:
    """
    可注入字段标记

    放在 Annotated 的元数据中，name 为逻辑名称模板，可以包含一个 ${var} 占位符
    """

    __slots__ = ('_name',)

    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"InjectProperty 的名称必须是非空字符串: {name!r}")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, InjectProperty):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash((InjectProperty, self._name))

    def __repr__(self) -> str:
        return f"InjectProperty({self._name!r})"


class Property:
    """
    可注入字段的类型提示简写

    Property[int, "cnt"] 等价于 Annotated[int, InjectProperty("cnt")]
    """

    def __class_getitem__(cls, params):
        """支持 Property[Type, 'name'] 语法"""
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError("Property 需要两个参数: Property[Type, 'name']")
        declared_type, name = params
        return Annotated[declared_type, InjectProperty(name)]


def find_marker(annotation: Any) -> Optional[Tuple[Any, InjectProperty]]:
    """
    从类型注解中查找注入标记

    Args:
        annotation: 字段的类型注解

    Returns:
        (声明类型, 标记)，没有标记时返回 None
    """
    if get_origin(annotation) is not Annotated:
        return None

    declared_type, *metadata = get_args(annotation)
    for item in metadata:
        if isinstance(item, InjectProperty):
            return declared_type, item
    return None


def injectable(cls):
    """
    类装饰器：在定义时立即发现可注入字段

    字段类型不受支持时在导入阶段就抛出 UnsupportedFieldTypeError，
    而不是等到第一次注入
    """
    from .inject.registry import get_registry

    get_registry().get_injectors(cls)
    return cls
