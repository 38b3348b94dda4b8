"""
字段注入器

每个可注入字段对应一个 FieldInjector：解析名称模板、根据参数字典计算实际的键、
把原始值转换为字段声明的类型并写入目标对象
"""

import inspect
import types
from enum import Enum
from typing import Any, Mapping, Optional, Union, get_args, get_origin

from loguru import logger as loguru_logger

from ...exceptions import InvalidEnumValueError
from ...utils.converters import MISSING, Long, to_bool, to_int, to_long, to_string

logger = loguru_logger.bind(name=__name__)

_PLACEHOLDER_OPEN = '${'
_PLACEHOLDER_CLOSE = '}'


class FieldKind(Enum):
    """字段声明类型的分类"""

    INTEGER = 'integer'
    LONG = 'long'
    BOOLEAN = 'boolean'
    ENUM = 'enum'
    INTERFACE = 'interface'
    STRING = 'string'


class InjectionOutcome(Enum):
    """
    单个字段的注入结果

    注入是尽力而为的：除 INJECTED 外的结果都不会抛出，字段保持原值
    """

    INJECTED = 'injected'
    KEY_MISSING = 'key_missing'
    NOT_CONVERTIBLE = 'not_convertible'
    FAILED = 'failed'


def unwrap_optional(declared_type: Any) -> Any:
    """Optional[X] -> X，其他类型原样返回"""
    origin = get_origin(declared_type)
    if origin is Union or origin is getattr(types, 'UnionType', None):
        args = [arg for arg in get_args(declared_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return declared_type


def _is_interface(declared_type: Any) -> bool:
    if declared_type is Any:
        return True
    target = get_origin(declared_type) or declared_type
    if not inspect.isclass(target):
        return False
    return bool(getattr(target, '_is_protocol', False)) or inspect.isabstract(target)


def classify_type(declared_type: Any) -> Optional[FieldKind]:
    """
    判断字段类型属于哪一类

    Args:
        declared_type: 已去掉 Optional 的声明类型

    Returns:
        FieldKind，不支持的类型返回 None
    """
    if declared_type is Long:
        return FieldKind.LONG
    if declared_type is bool:
        return FieldKind.BOOLEAN
    if declared_type is int:
        return FieldKind.INTEGER
    if declared_type is str:
        return FieldKind.STRING
    if inspect.isclass(declared_type) and issubclass(declared_type, Enum):
        return FieldKind.ENUM
    if _is_interface(declared_type):
        return FieldKind.INTERFACE
    return None


def convert(kind: FieldKind, target_type: Any, value: Any) -> Any:
    """
    把原始值转换为字段类型

    Args:
        kind: 字段类型分类
        target_type: 字段声明类型，枚举转换时使用
        value: 参数字典中的原始值

    Returns:
        转换后的值，无法转换时返回 MISSING

    Raises:
        InvalidEnumValueError: 枚举字段收到无法匹配的名称
    """
    if value is None:
        return MISSING
    if kind is FieldKind.INTEGER:
        return to_int(value, MISSING)
    if kind is FieldKind.LONG:
        return to_long(value, MISSING)
    if kind is FieldKind.BOOLEAN:
        return to_bool(value, MISSING)
    if kind is FieldKind.ENUM:
        if isinstance(value, target_type):
            return value
        if isinstance(value, str):
            try:
                return target_type[value]
            except KeyError:
                raise InvalidEnumValueError(target_type, value) from None
        return MISSING
    if kind is FieldKind.INTERFACE:
        return value
    return to_string(value, MISSING)


class FieldHandle:
    """
    目标字段的访问句柄

    write 使用 object.__setattr__，绕过自定义 __setattr__ 与冻结的 dataclass
    """

    __slots__ = ('owner', 'name', 'declared_type')

    def __init__(self, owner: type, name: str, declared_type: Any):
        self.owner = owner
        self.name = name
        self.declared_type = declared_type

    def read(self, instance: Any, default: Any = MISSING) -> Any:
        if default is MISSING:
            return getattr(instance, self.name)
        return getattr(instance, self.name, default)

    def write(self, instance: Any, value: Any) -> None:
        object.__setattr__(instance, self.name, value)

    def __repr__(self) -> str:
        return f"FieldHandle({self.owner.__qualname__}.{self.name})"


class FieldInjector:
    """
    单个字段的注入器

    构造后不可变；名称模板只在构造时解析一次
    """

    __slots__ = ('_field', '_kind', '_name', '_start', '_end', '_placeholder')

    def __init__(self, field: FieldHandle, name: str, kind: FieldKind):
        self._field = field
        self._kind = kind
        self._name = name
        self._start = name.find(_PLACEHOLDER_OPEN)
        # 与 ${ 的位置无关，取第一个 }
        self._end = name.find(_PLACEHOLDER_CLOSE)
        if self._start >= 0 and self._end >= self._start:
            self._placeholder = name[self._start + len(_PLACEHOLDER_OPEN):self._end]
        else:
            self._placeholder = None

    @property
    def field(self) -> FieldHandle:
        return self._field

    @property
    def kind(self) -> FieldKind:
        return self._kind

    @property
    def target_type(self) -> Any:
        return self._field.declared_type

    @property
    def name(self) -> str:
        return self._name

    @property
    def placeholder(self) -> Optional[str]:
        return self._placeholder

    @property
    def placeholder_span(self) -> Optional[tuple]:
        """占位符 ${ 与 } 的位置，静态模板返回 None"""
        if self._placeholder is None:
            return None
        return self._start, self._end

    @property
    def is_dynamic(self) -> bool:
        return self._placeholder is not None

    def resolve_key(self, parameters: Mapping[str, Any]) -> str:
        """
        计算实际查找的键

        占位符变量在参数中不存在时退回到未替换的原始名称
        """
        if self._placeholder is None:
            return self._name

        substitute = to_string(parameters.get(self._placeholder), None)
        if substitute is None:
            return self._name

        prefix = self._name[:self._start]
        suffix = self._name[self._end + 1:]
        return prefix + substitute + suffix

    def inject(self, target: Any, parameters: Mapping[str, Any]) -> InjectionOutcome:
        """
        把参数注入到目标对象的字段

        转换或写入过程中的异常被记录后丢弃，字段保持原值，
        其余字段的注入不受影响

        Returns:
            InjectionOutcome
        """
        key = self.resolve_key(parameters)
        raw = parameters.get(key)
        if raw is None:
            return InjectionOutcome.KEY_MISSING

        try:
            value = convert(self._kind, self.target_type, raw)
            if value is MISSING:
                return InjectionOutcome.NOT_CONVERTIBLE
            self._field.write(target, value)
        except Exception as e:
            logger.debug(f"注入字段 {self._field!r} 失败 (键: {key}): {e}")
            return InjectionOutcome.FAILED

        return InjectionOutcome.INJECTED

    def __repr__(self) -> str:
        return (
            f"FieldInjector(field={self._field.name!r}, name={self._name!r}, "
            f"kind={self._kind.value})"
        )
