"""
FieldWire 依赖注入包

包含：
- core/di/registry.py: 服务注册表
- core/di/injector.py: 成员注入器
- core/di/decorators.py: 注入标记与注入点发现
- core/di/container.py: 组合根容器
- core/config.py / core/logger.py: 配置与日志
"""

from .core.di import (
    INJECT,
    DependencyContainer,
    Inject,
    Injector,
    ServiceRegistry,
    inject,
)
from .exceptions import (
    ConfigurationError,
    FieldWireException,
    NotRegistered,
    UnsupportedMember,
)

__version__ = "0.1.0"

__all__ = [
    "ServiceRegistry",
    "Injector",
    "DependencyContainer",
    "INJECT",
    "Inject",
    "inject",
    "FieldWireException",
    "ConfigurationError",
    "NotRegistered",
    "UnsupportedMember",
]
