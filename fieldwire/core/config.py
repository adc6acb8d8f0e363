"""
配置管理模块

使用 Dynaconf 读取 YAML 配置，环境变量可以覆盖文件中的值
"""

import os
from pathlib import Path
from typing import Any, List, Optional

from dynaconf import Dynaconf

from ..exceptions import ConfigurationError

CONFIG_NAME = 'config.yaml'

DEFAULT_SETTINGS = {
    "logging": {
        "level": "INFO",
        "json": False
    },
    "di": {
        "warn_on_overwrite": True
    }
}


def _find_project_root() -> Path:
    """从当前目录向上查找包含 pyproject.toml 的目录，找不到时使用当前目录"""
    cwd = Path.cwd().absolute()
    for directory in (cwd, *cwd.parents):
        if (directory / 'pyproject.toml').exists():
            return directory
    return cwd


def _get_config_files(config_file: Optional[str] = None) -> List[str]:
    """
    获取需要加载的配置文件

    优先级从高到低：CONFIG_FILE 环境变量 > config_file 参数 >
    项目根目录/conf/config.yaml > 项目根目录/config.yaml

    Returns:
        按加载顺序排列的文件列表（Dynaconf 中后加载的文件优先级更高）
    """
    if config_file and not os.path.exists(config_file):
        raise ConfigurationError(f"配置文件不存在: {config_file}", config_key="config_file")

    root = _find_project_root()
    candidates = [
        os.getenv('CONFIG_FILE'),
        config_file,
        str(root / 'conf' / CONFIG_NAME),
        str(root / CONFIG_NAME),
    ]

    found = []
    for path in candidates:
        if path and os.path.exists(path) and path not in found:
            found.append(path)
    return found[::-1]


def create_settings(config_file: Optional[str] = None) -> Dynaconf:
    """创建 Dynaconf 设置实例"""
    return Dynaconf(
        settings_files=_get_config_files(config_file),
        # 不使用前缀，嵌套键用 __ 分隔，例如 DI__WARN_ON_OVERWRITE
        envvar_prefix=False,
        envvar_separator="__",
        env_parse_values=True,
        ignore_unknown_envvars=True,
        merge_enabled=True,
        default_settings=DEFAULT_SETTINGS
    )


# 全局配置实例
_settings: Optional[Dynaconf] = None


def get_settings(config_file: Optional[str] = None) -> Dynaconf:
    """获取 Dynaconf 设置实例"""
    global _settings

    if _settings is None:
        _settings = create_settings(config_file)

    return _settings


def get_config(key: str, default: Any = None) -> Any:
    """获取配置值的便捷函数"""
    return get_settings().get(key, default)


def get_config_str(key: str, default: str = "") -> str:
    """获取字符串配置值的便捷函数"""
    value = get_config(key, default)
    return str(value) if value is not None else default


def get_config_bool(key: str, default: bool = False) -> bool:
    """获取布尔配置值的便捷函数"""
    value = get_config(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def reload_config() -> None:
    """重新加载配置"""
    global _settings
    _settings = None
