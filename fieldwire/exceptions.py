"""
FieldWire 异常模块

提供依赖注入相关的异常类
"""

from typing import Any, Dict, Optional


def _type_name(obj: Any) -> str:
    """获取类型的可读名称"""
    return getattr(obj, '__qualname__', None) or repr(obj)


class FieldWireException(Exception):
    """FieldWire 异常基类"""

    def __init__(
        self,
        message: str = "FieldWire 错误",
        code: str = "FIELDWIRE_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(FieldWireException):
    """配置错误异常"""

    def __init__(
        self,
        message: str = "配置错误",
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.config_key = config_key
        super().__init__(message, "CONFIGURATION_ERROR", details)


class NotRegistered(FieldWireException, LookupError):
    """
    服务未注册异常

    由 ServiceRegistry.resolve 抛出，Injector.inject 原样向上传播
    """

    def __init__(
        self,
        service_type: Any,
        member: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.service_type = service_type
        self.member = member
        message = f"类型 '{_type_name(service_type)}' 的服务未注册"
        if member:
            message = f"{message}（注入成员: {member}）"
        super().__init__(message, "NOT_REGISTERED", details)


class UnsupportedMember(FieldWireException, TypeError):
    """
    不支持的注入成员异常

    注入标记只能用于字段和可写属性，标记在方法等其他成员上属于声明错误
    """

    def __init__(
        self,
        member: str,
        owner: Any = None,
        reason: str = "只有字段和可写属性可以注入",
        details: Optional[Dict[str, Any]] = None
    ):
        self.member = member
        self.owner = owner
        self.reason = reason
        location = f"{_type_name(owner)}.{member}" if owner is not None else member
        super().__init__(f"成员 '{location}' 不支持注入: {reason}", "UNSUPPORTED_MEMBER", details)
