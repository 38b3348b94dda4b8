"""
注入器注册表

按类型缓存字段注入器列表：首次请求时沿继承链发现可注入字段，之后直接返回缓存。
缓存条目在进程生命周期内不会失效或淘汰，类型集合被视为有限且静态。
"""

import inspect
import threading
from typing import Any, Dict, List, Tuple, get_type_hints

from loguru import logger as loguru_logger

from ...exceptions import ConfigurationError, UnsupportedFieldTypeError
from ..decorators import find_marker
from .field import FieldHandle, FieldInjector, classify_type, unwrap_optional

logger = loguru_logger.bind(name=__name__)

_MARKER_HINTS = ('InjectProperty', 'Property[')


def _resolve_one(klass: type, field_name: str, annotation: Any) -> Any:
    """在 klass 的命名空间中单独解析一个字段注解"""
    holder = type(klass.__name__, (), {
        '__module__': klass.__module__,
        '__annotations__': {field_name: annotation},
    })
    return get_type_hints(holder, localns=dict(vars(klass)), include_extras=True)[field_name]


def _own_annotations(klass: type) -> List[Tuple[str, Any]]:
    """
    获取类自身声明的字段注解（不含父类），保持声明顺序

    整体解析失败时逐个字段解析；无法解析且看起来带有注入标记的字段抛出 ConfigurationError，
    其他无法解析的字段跳过
    """
    try:
        annotations = inspect.get_annotations(klass)
    except Exception as e:
        raise ConfigurationError(
            f"无法读取 {klass.__qualname__} 的类型注解: {e}",
            details={'class': klass.__qualname__}
        ) from e

    try:
        hints = get_type_hints(klass, include_extras=True)
    except (NameError, SyntaxError, TypeError):
        hints = None
    if hints is not None:
        return [(field_name, hints[field_name]) for field_name in annotations if field_name in hints]

    result = []
    for field_name, annotation in annotations.items():
        try:
            result.append((field_name, _resolve_one(klass, field_name, annotation)))
        except (NameError, SyntaxError, TypeError) as e:
            if isinstance(annotation, str) and any(hint in annotation for hint in _MARKER_HINTS):
                raise ConfigurationError(
                    f"无法解析字段注解 {klass.__qualname__}.{field_name}: {e}",
                    config_key=field_name
                ) from e
            logger.debug(f"跳过无法解析的注解 {klass.__qualname__}.{field_name}: {e}")
    return result


class InjectorRegistry:
    """
    注入器注册表

    缓存命中时无锁读取；未命中时使用一把所有类型共享的锁构建并发布完整的列表，
    其他线程只会看到完整构建好的列表
    """

    def __init__(self):
        self._injectors: Dict[type, Tuple[FieldInjector, ...]] = {}
        self._lock = threading.Lock()

    def get_injectors(self, cls: type) -> Tuple[FieldInjector, ...]:
        """
        获取类型的字段注入器列表

        Args:
            cls: 目标对象的运行时类型

        Returns:
            按发现顺序排列的注入器，子类字段在前，父类字段在后

        Raises:
            UnsupportedFieldTypeError: 标记字段的类型不受支持
            ConfigurationError: 标记字段的注解无法解析
        """
        injectors = self._injectors.get(cls)
        if injectors is not None:
            return injectors

        with self._lock:
            injectors = self._injectors.get(cls)
            if injectors is None:
                injectors = self._discover(cls)
                self._injectors[cls] = injectors
        return injectors

    def _discover(self, cls: type) -> Tuple[FieldInjector, ...]:
        injectors = []
        for klass in cls.__mro__:
            if klass is object:
                continue
            for field_name, annotation in _own_annotations(klass):
                found = find_marker(annotation)
                if found is None:
                    continue

                declared_type, marker = found
                declared_type = unwrap_optional(declared_type)
                kind = classify_type(declared_type)
                if kind is None:
                    raise UnsupportedFieldTypeError(klass, field_name, declared_type)

                field = FieldHandle(klass, field_name, declared_type)
                injectors.append(FieldInjector(field, marker.name, kind))

        logger.debug(f"发现 {cls.__qualname__} 的可注入字段: {len(injectors)} 个")
        return tuple(injectors)

    def is_cached(self, cls: type) -> bool:
        """检查类型的注入器是否已缓存"""
        return cls in self._injectors

    def cached_types(self) -> List[type]:
        """已缓存的类型列表"""
        return list(self._injectors.keys())


_registry = InjectorRegistry()


def get_registry() -> InjectorRegistry:
    """获取进程级的注入器注册表"""
    return _registry
