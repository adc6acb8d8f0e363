"""
服务注册表

按类型保存服务实例，每个类型最多一个实例
"""

import threading
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from dependency_injector import providers

from ...exceptions import NotRegistered
from ..config import get_config_bool
from ..logger import get_logger

logger = get_logger("fieldwire.di")

T = TypeVar('T')


class ServiceRegistry:
    """服务注册表"""

    def __init__(self):
        """初始化服务注册表"""
        # service_type -> providers.Object(instance)
        self._services: Dict[type, providers.Object] = {}
        self._lock = threading.RLock()
        self._warn_on_overwrite = get_config_bool("di.warn_on_overwrite", True)

    def register(self, service: Any) -> None:
        """
        注册服务实例

        以实例自身的运行时类型作为键，重复注册同一类型时后者覆盖前者

        Args:
            service: 服务实例
        """
        service_type = type(service)
        with self._lock:
            replaced = service_type in self._services
            self._services[service_type] = providers.Object(service)

        if replaced and self._warn_on_overwrite:
            logger.warning(f"服务 '{service_type.__qualname__}' 已被重新注册，之前的实例被覆盖")
        else:
            logger.debug(f"已注册服务: {service_type.__qualname__}")

    def resolve(self, service_type: Type[T]) -> T:
        """
        获取服务实例

        Args:
            service_type: 服务类型

        Returns:
            服务实例

        Raises:
            NotRegistered: 如果该类型没有注册实例
        """
        service, found = self.try_resolve(service_type)
        if not found:
            raise NotRegistered(service_type)
        return service

    def try_resolve(self, service_type: Type[T]) -> Tuple[Optional[T], bool]:
        """
        尝试获取服务实例

        Args:
            service_type: 服务类型

        Returns:
            (服务实例, 是否找到)，未找到时返回 (None, False)
        """
        with self._lock:
            provider = self._services.get(service_type)
        if provider is None:
            return None, False
        return provider(), True

    def has_service(self, service_type: type) -> bool:
        """
        检查服务是否已注册

        Args:
            service_type: 服务类型

        Returns:
            是否存在
        """
        with self._lock:
            return service_type in self._services

    def get_registered_types(self) -> List[type]:
        """获取所有已注册的服务类型"""
        with self._lock:
            return list(self._services.keys())

    def clear(self) -> None:
        """清空注册表"""
        with self._lock:
            self._services.clear()

    def __contains__(self, service_type: type) -> bool:
        return self.has_service(service_type)

    def __len__(self) -> int:
        with self._lock:
            return len(self._services)
