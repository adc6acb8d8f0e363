#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
依赖注入示例

展示 FieldWire 的注册、字段注入和属性注入
"""

from fieldwire import DependencyContainer, Inject, inject
from fieldwire.core import setup_logging


# ==================== 服务 ====================

class DummyService:
    """示例服务"""

    def __init__(self, name: str = "Dummy Service"):
        self.name = name


class CacheService:
    """缓存服务"""

    def __init__(self):
        self.cache = {}


# ==================== 客户端 ====================

class DummyClient:
    """字段注入：公有与私有字段"""

    dummy_service: Inject[DummyService]
    _cache: Inject[CacheService]

    def print_service_name(self):
        print(f"✅ {self.dummy_service.name} (cache={self._cache.cache})")


class ReportClient:
    """属性注入"""

    @inject
    @property
    def service(self) -> DummyService:
        return self._service

    @service.setter
    def service(self, value):
        self._service = value


class PlainObject:
    """没有注入点的对象，wire 时会被跳过"""


def main():
    setup_logging()

    container = DependencyContainer()
    container.register(DummyService(), CacheService())

    instances = [DummyClient(), ReportClient(), PlainObject()]
    wired = container.wire(*instances)
    print(f"已注入 {len(wired)}/{len(instances)} 个对象")

    for instance in instances:
        if isinstance(instance, DummyClient):
            instance.print_service_name()
        elif isinstance(instance, ReportClient):
            print(f"✅ ReportClient 使用 {instance.service.name}")


if __name__ == "__main__":
    main()
