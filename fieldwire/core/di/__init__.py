"""
依赖注入模块

提供基于类型的服务注册表与成员注入功能
"""

from .container import DependencyContainer
from .decorators import (
    INJECT,
    Inject,
    InjectionSite,
    clear_injection_site_cache,
    discover_injection_sites,
    get_injection_sites,
    has_injection_sites,
    inject,
)
from .injector import Injector
from .registry import ServiceRegistry

__all__ = [
    'DependencyContainer',
    'ServiceRegistry',
    'Injector',
    'INJECT',
    'Inject',
    'inject',
    'InjectionSite',
    'discover_injection_sites',
    'get_injection_sites',
    'has_injection_sites',
    'clear_injection_site_cache',
]
