"""
服务注册表测试
"""

import threading

import pytest

from fieldwire.core.di import ServiceRegistry
from fieldwire.exceptions import NotRegistered


class UserRepository:
    pass


class CachedUserRepository(UserRepository):
    pass


class EmailService:
    def __init__(self, sender: str = "noreply"):
        self.sender = sender


class TestRegisterAndResolve:
    """注册与查找"""

    def test_resolve_returns_registered_instance(self, registry):
        repo = UserRepository()
        registry.register(repo)

        assert registry.resolve(UserRepository) is repo

    def test_try_resolve_reports_found(self, registry):
        repo = UserRepository()
        registry.register(repo)

        assert registry.try_resolve(UserRepository) == (repo, True)

    def test_unregistered_type_raises(self, registry):
        with pytest.raises(NotRegistered) as exc_info:
            registry.resolve(EmailService)

        assert exc_info.value.service_type is EmailService
        assert exc_info.value.code == "NOT_REGISTERED"

    def test_not_registered_is_lookup_error(self, registry):
        with pytest.raises(LookupError):
            registry.resolve(EmailService)

    def test_try_resolve_unregistered_returns_empty(self, registry):
        assert registry.try_resolve(EmailService) == (None, False)

    def test_registration_overwrites_previous_instance(self, registry):
        first = EmailService("first")
        second = EmailService("second")
        registry.register(first)
        registry.register(second)

        assert registry.resolve(EmailService) is second
        assert len(registry) == 1

    def test_keyed_by_runtime_type_only(self, registry):
        registry.register(CachedUserRepository())

        assert registry.has_service(CachedUserRepository)
        assert registry.try_resolve(UserRepository) == (None, False)
        with pytest.raises(NotRegistered):
            registry.resolve(UserRepository)

    def test_none_registers_under_none_type(self, registry):
        registry.register(None)

        assert registry.try_resolve(type(None)) == (None, True)
        assert registry.resolve(type(None)) is None

    def test_instance_is_not_copied(self, registry):
        service = EmailService()
        registry.register(service)
        service.sender = "changed"

        assert registry.resolve(EmailService).sender == "changed"

    def test_lookups_agree(self, registry):
        registry.register(UserRepository())
        registry.register(EmailService())

        for service_type in (UserRepository, EmailService, CachedUserRepository, dict):
            _, found = registry.try_resolve(service_type)
            try:
                registry.resolve(service_type)
                resolved = True
            except NotRegistered:
                resolved = False
            assert found is resolved

    def test_lookups_have_no_side_effects(self, registry):
        registry.try_resolve(UserRepository)
        with pytest.raises(NotRegistered):
            registry.resolve(UserRepository)

        assert len(registry) == 0


class TestRegistryHelpers:
    """辅助方法"""

    def test_has_service_and_contains(self, registry):
        registry.register(UserRepository())

        assert registry.has_service(UserRepository)
        assert UserRepository in registry
        assert EmailService not in registry

    def test_get_registered_types(self, registry):
        registry.register(UserRepository())
        registry.register(EmailService())

        assert set(registry.get_registered_types()) == {UserRepository, EmailService}

    def test_clear(self, registry):
        registry.register(UserRepository())
        registry.clear()

        assert len(registry) == 0
        assert registry.try_resolve(UserRepository) == (None, False)


class TestOverwriteLogging:
    """重复注册日志"""

    def test_overwrite_logs_warning(self, registry, log_records):
        registry.register(EmailService())
        registry.register(EmailService())

        warnings = [r for r in log_records if r["level"].name == "WARNING"]
        assert len(warnings) == 1
        assert "EmailService" in warnings[0]["message"]

    def test_overwrite_warning_can_be_disabled(self, write_config, log_records):
        write_config("di:\n  warn_on_overwrite: false\n")
        registry = ServiceRegistry()

        registry.register(EmailService("first"))
        registry.register(EmailService("second"))

        assert not [r for r in log_records if r["level"].name == "WARNING"]
        assert registry.resolve(EmailService).sender == "second"


class TestConcurrency:
    """并发注册与查找"""

    def test_concurrent_registration(self, registry):
        service_types = [type(f"Service{i}", (), {}) for i in range(16)]
        barrier = threading.Barrier(len(service_types))
        errors = []

        def worker(service_type):
            try:
                barrier.wait()
                instance = service_type()
                registry.register(instance)
                assert registry.resolve(service_type) is instance
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(t,)) for t in service_types]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(registry) == len(service_types)
