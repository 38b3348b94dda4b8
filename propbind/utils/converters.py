"""
标量转换工具

把任意值转换为 int / Long / bool / str，无法转换时返回调用方给出的默认值
"""

import numbers
import re
from decimal import Decimal
from enum import Enum
from typing import Any, NewType

# 64 位有符号整数，对应 Long 字段
Long = NewType('Long', int)

LONG_MIN = -2 ** 63
LONG_MAX = 2 ** 63 - 1

_INT_PATTERN = re.compile(r'^[+-]?\d+$')

_TRUE_VALUES = frozenset(('true', 'yes', 'on', '1', 'y'))
_FALSE_VALUES = frozenset(('false', 'no', 'off', '0', 'n'))


class _Missing:
    """缺省值标记，区别于 None 和任何真实的转换结果"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'MISSING'

    def __reduce__(self):
        return 'MISSING'


MISSING = _Missing()


def _to_text(value: Any):
    if isinstance(value, bytes):
        try:
            return value.decode('utf-8')
        except UnicodeDecodeError:
            return None
    if isinstance(value, str):
        return value
    return None


def to_int(value: Any, default: Any = None) -> Any:
    """
    转换为整数

    Args:
        value: 原始值，支持整数、实数（截断）和十进制数字字符串
        default: 无法转换时的返回值

    Returns:
        int 或 default
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return int(value)
    if isinstance(value, (numbers.Real, Decimal)):
        # NaN 抛出 ValueError，无穷大抛出 OverflowError
        try:
            return int(value)
        except (ValueError, OverflowError):
            return default

    text = _to_text(value)
    if text is None:
        return default
    text = text.strip()
    if not _INT_PATTERN.match(text):
        return default
    return int(text, 10)


def to_long(value: Any, default: Any = None) -> Any:
    """
    转换为 64 位整数

    与 to_int 相同，超出 [-2**63, 2**63-1] 的值返回 default
    """
    result = to_int(value, MISSING)
    if result is MISSING or not LONG_MIN <= result <= LONG_MAX:
        return default
    return Long(result)


def to_bool(value: Any, default: Any = None) -> Any:
    """
    转换为布尔值

    Args:
        value: 原始值，字符串支持 true/yes/on/1/y 与 false/no/off/0/n（忽略大小写）
        default: 无法转换时的返回值

    Returns:
        bool 或 default
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0

    text = _to_text(value)
    if text is None:
        return default
    text = text.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return default


def to_string(value: Any, default: Any = None) -> Any:
    """
    转换为字符串

    None 返回 default；枚举取名称；布尔值输出 true/false；其他对象使用 str()
    """
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        text = _to_text(value)
        return default if text is None else text
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)
