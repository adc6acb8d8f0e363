"""
依赖注入容器

组合根：持有一个服务注册表和绑定在其上的注入器
"""

from typing import Any, List, Optional, Tuple, Type, TypeVar

from ..logger import get_logger
from .injector import Injector
from .registry import ServiceRegistry

logger = get_logger("fieldwire.di")

T = TypeVar('T')


class DependencyContainer:
    """依赖注入容器管理器"""

    def __init__(self, registry: Optional[ServiceRegistry] = None):
        """
        初始化依赖注入容器

        Args:
            registry: 服务注册表，默认创建新的注册表
        """
        self.registry = registry if registry is not None else ServiceRegistry()
        self.injector = Injector(self.registry)

    def register(self, *services: Any) -> None:
        """
        注册服务实例

        Args:
            *services: 服务实例列表
        """
        for service in services:
            self.registry.register(service)

    def resolve(self, service_type: Type[T]) -> T:
        """获取服务实例，未注册时抛出 NotRegistered"""
        return self.registry.resolve(service_type)

    def try_resolve(self, service_type: Type[T]) -> Tuple[Optional[T], bool]:
        """尝试获取服务实例"""
        return self.registry.try_resolve(service_type)

    def has_service(self, service_type: type) -> bool:
        """检查服务是否已注册"""
        return self.registry.has_service(service_type)

    def inject(self, target: Any) -> None:
        """向单个目标对象注入依赖"""
        self.injector.inject(target)

    def wire(self, *targets: Any) -> List[Any]:
        """
        连接目标对象

        只处理声明了注入点的对象，其余对象原样跳过

        Args:
            *targets: 目标对象列表

        Returns:
            完成注入的对象列表
        """
        wired = self.injector.inject_all(targets)
        logger.debug(f"已连接 {len(wired)}/{len(targets)} 个对象")
        return wired

    def clear(self) -> None:
        """清空容器"""
        self.registry.clear()
