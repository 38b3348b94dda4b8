"""
PropBind 异常模块

提供框架相关的异常类
"""

from typing import Any, Dict, Optional


class PropBindException(Exception):
    """PropBind 框架异常基类"""

    def __init__(
        self,
        message: str = "PropBind 框架错误",
        code: str = "PROPBIND_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(PropBindException):
    """配置错误异常"""

    def __init__(
        self,
        message: str = "配置错误",
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.config_key = config_key
        super().__init__(message, "CONFIGURATION_ERROR", details)


class UnsupportedFieldTypeError(ConfigurationError):
    """
    字段类型不受支持

    在首次构建某个类的注入器列表时抛出，该类的注入器不会被缓存
    """

    def __init__(
        self,
        owner: type,
        field: str,
        declared_type: Any,
        details: Optional[Dict[str, Any]] = None
    ):
        self.owner = owner
        self.field = field
        self.declared_type = declared_type
        message = (
            f"不支持的字段类型 {owner.__qualname__}.{field}: {declared_type!r}，"
            f"仅支持 int/Long/bool/Enum/接口/str"
        )
        super().__init__(message, config_key=field, details=details)


class InvalidEnumValueError(PropBindException, ValueError):
    """枚举名称无法匹配"""

    def __init__(
        self,
        enum_type: type,
        value: Any,
        details: Optional[Dict[str, Any]] = None
    ):
        self.enum_type = enum_type
        self.value = value
        message = f"{enum_type.__qualname__} 中没有名为 {value!r} 的枚举值"
        PropBindException.__init__(self, message, "INVALID_ENUM_VALUE", details)


class ParameterSourceError(PropBindException):
    """参数来源加载失败"""

    def __init__(
        self,
        message: str = "参数来源加载失败",
        source: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.source = source
        super().__init__(message, "PARAMETER_SOURCE_ERROR", details)
