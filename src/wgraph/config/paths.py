"""Path helpers for wgraph configuration.

The base directory can be overridden with the WGRAPH_HOME environment variable.

Default locations:
- Linux/macOS: ~/.wgraph
- Windows: %USERPROFILE%\\.wgraph
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "WGRAPH_HOME"


@lru_cache(maxsize=1)
def get_wgraph_home() -> Path:
    """Get the base directory for wgraph configuration.

    Resolution order:
    1. WGRAPH_HOME environment variable (if set)
    2. ~/.wgraph

    The result is cached; call ``get_wgraph_home.cache_clear()`` after
    changing the environment.
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".wgraph"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_wgraph_home() / "config.toml"
