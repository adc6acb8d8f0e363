"""
依赖注入器

扫描目标对象上带注入标记的成员，并从服务注册表中取值写入
"""

from typing import Any, Iterable, List

from ...exceptions import NotRegistered
from ..logger import get_logger
from .decorators import get_injection_sites
from .registry import ServiceRegistry

logger = get_logger("fieldwire.di")


class Injector:
    """
    依赖注入器

    绑定一个服务注册表，本身不保存任何调用状态，可以反复使用

    Note:
        注入失败时不会回滚，同一次调用中已经写入的成员保持写入后的值
    """

    def __init__(self, registry: ServiceRegistry):
        """
        初始化注入器

        Args:
            registry: 服务注册表
        """
        self.registry = registry

    def inject(self, target: Any) -> None:
        """
        向目标对象注入依赖

        目标类型上所有带标记的字段和属性（包括私有成员）都会被覆盖写入

        Args:
            target: 目标对象

        Raises:
            NotRegistered: 如果某个标记成员的类型没有注册实例
            UnsupportedMember: 如果标记被用在字段或可写属性以外的成员上
        """
        target_type = type(target)
        sites = get_injection_sites(target_type)

        written = 0
        for site in sites:
            service, found = self.registry.try_resolve(site.service_type)
            if not found:
                logger.error(
                    f"注入 {target_type.__qualname__}.{site.name} 失败: "
                    f"类型 '{getattr(site.service_type, '__qualname__', site.service_type)}' 未注册，"
                    f"已写入 {written}/{len(sites)} 个成员"
                )
                raise NotRegistered(site.service_type, member=site.name)
            site.assign(target, service)
            written += 1

        logger.debug(f"已完成 {target_type.__qualname__} 的依赖注入 ({written} 个成员)")

    def inject_all(self, targets: Iterable[Any]) -> List[Any]:
        """
        向一组目标对象注入依赖

        没有声明注入点的对象会被跳过

        Args:
            targets: 目标对象列表

        Returns:
            实际完成注入的对象列表（保持输入顺序）
        """
        injected = []
        for target in targets:
            if not get_injection_sites(type(target)):
                continue
            self.inject(target)
            injected.append(target)
        return injected
