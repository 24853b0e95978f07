"""Configuration module."""

from wgraph.config.loader import get_default_config, load_config
from wgraph.config.models import (
    ConfigError,
    GraphConfig,
    LoggingConfig,
    WgraphConfig,
)
from wgraph.config.paths import get_config_path, get_wgraph_home

__all__ = [
    "ConfigError",
    "GraphConfig",
    "LoggingConfig",
    "WgraphConfig",
    "get_config_path",
    "get_default_config",
    "get_wgraph_home",
    "load_config",
]
