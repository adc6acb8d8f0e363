"""
测试公共夹具
"""

import pytest
from loguru import logger

from fieldwire.core.config import reload_config
from fieldwire.core.di import DependencyContainer, Injector, ServiceRegistry


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """每个测试使用独立的配置（不读取项目中的配置文件）"""
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    reload_config()
    yield
    reload_config()


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    """写入配置文件并通过 CONFIG_FILE 启用"""
    def _write(content: str, name: str = "config.yaml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        monkeypatch.setenv("CONFIG_FILE", str(path))
        reload_config()
        return path
    return _write


@pytest.fixture
def registry():
    return ServiceRegistry()


@pytest.fixture
def injector(registry):
    return Injector(registry)


@pytest.fixture
def container():
    return DependencyContainer()


@pytest.fixture
def log_records():
    """收集 loguru 日志记录"""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
