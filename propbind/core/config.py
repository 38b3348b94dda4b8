"""
配置管理模块

使用 Dynaconf 提供配置管理功能：
- 库自身的设置（日志级别、格式等）
- 从本地文件或远程 URL 加载注入用的参数
"""

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

import requests
from dynaconf import Dynaconf
from loguru import logger as loguru_logger

from ..exceptions import ParameterSourceError

logger = loguru_logger.bind(name=__name__)

_SUPPORTED_SUFFIXES = ('.yaml', '.yml', '.toml', '.json')


def _find_project_root() -> str:
    """查找项目根目录"""
    current_dir = Path.cwd().absolute()

    while current_dir.parent != current_dir:
        if (current_dir / 'pyproject.toml').exists():
            return str(current_dir)
        current_dir = current_dir.parent

    return os.getcwd()


def _is_url(path: str) -> bool:
    """检查是否为 URL"""
    return bool(path) and path.startswith(('http://', 'https://'))


def _cache_dir() -> str:
    cache_dir = os.path.join(tempfile.gettempdir(), 'propbind_config_cache')
    os.makedirs(cache_dir, exist_ok=True)
    return cache_dir


def _download_config(url: str, cache_dir: str) -> str:
    """
    下载配置文件到缓存

    网络失败时使用之前缓存的文件，没有缓存则抛出 ParameterSourceError
    """
    suffix = Path(urlparse(url).path).suffix.lower()
    if suffix not in _SUPPORTED_SUFFIXES:
        suffix = '.yaml'

    url_hash = hashlib.md5(url.encode()).hexdigest()
    cache_path = os.path.join(cache_dir, f"{url_hash}{suffix}")

    try:
        logger.info(f"正在下载配置文件: {url}")
        response = requests.get(url, timeout=30)
        response.raise_for_status()

        with open(cache_path, 'w', encoding='utf-8') as f:
            f.write(response.text)

        logger.debug(f"配置文件已缓存到: {cache_path}")
        return cache_path
    except requests.RequestException as e:
        if os.path.exists(cache_path):
            logger.warning(f"下载配置文件失败，使用缓存的配置文件 {cache_path}: {e}")
            return cache_path
        raise ParameterSourceError(f"下载配置文件失败且无可用缓存: {e}", source=url) from e


def _get_config_files(config_file: Optional[str] = None) -> list:
    """获取配置文件列表，按优先级排序

    优先级：环境变量 > 参数指定 > 项目根目录/conf > 项目根目录
    """
    project_root = _find_project_root()

    config_files = []
    added_paths = set()

    config_paths = [
        os.getenv('PROPBIND_CONFIG_FILE'),
        config_file,
        os.path.join(project_root, 'conf', 'propbind.yaml'),
        os.path.join(project_root, 'propbind.yaml'),
    ]

    for config_path in config_paths:
        if not config_path:
            continue

        if _is_url(config_path):
            downloaded_path = _download_config(config_path, _cache_dir())
            if downloaded_path not in added_paths:
                config_files.append(downloaded_path)
                added_paths.add(downloaded_path)
        elif os.path.exists(config_path) and config_path not in added_paths:
            config_files.append(config_path)
            added_paths.add(config_path)

    return config_files


def create_settings(config_file: Optional[str] = None) -> Dynaconf:
    """创建库自身的 Dynaconf 设置实例"""
    return Dynaconf(
        settings_files=_get_config_files(config_file),
        envvar_prefix="PROPBIND",
        merge_enabled=True
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


def reload_config() -> None:
    """重新加载配置"""
    global _settings
    _settings = None


def load_parameters(source: str) -> Dynaconf:
    """
    加载注入用的参数

    Args:
        source: 本地文件路径（yaml/toml/json）或 http(s) URL

    Returns:
        Dynaconf 实例，可以直接作为参数字典传给 inject

    Raises:
        ParameterSourceError: 文件不存在、格式不支持或下载失败
    """
    if _is_url(source):
        path = _download_config(source, _cache_dir())
    else:
        path = source
        if not os.path.isfile(path):
            raise ParameterSourceError(f"参数文件不存在: {path}", source=source)
        if Path(path).suffix.lower() not in _SUPPORTED_SUFFIXES:
            raise ParameterSourceError(f"不支持的参数文件格式: {path}", source=source)

    return Dynaconf(
        settings_files=[path],
        envvar_prefix="PROPBIND_PARAM",
        merge_enabled=True
    )
