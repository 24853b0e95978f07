"""Logging setup for applications that embed wgraph.

The library only creates module loggers (``logging.getLogger(__name__)``)
and never configures handlers on import. Applications call
configure_logging() once at startup.

Logging Levels:
- DEBUG: Structural mutations (node added/removed, store reset)
- INFO: Graph loads and exports
"""

import logging
import os

from wgraph.config.models import LoggingConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - wgraph.store -> store
    - wgraph.config.loader -> config
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "wgraph":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


def _resolve_level(level: str | None) -> str:
    if level is None:
        level = os.environ.get("WGRAPH_LOG_LEVEL", "INFO")
    level = level.upper()
    if level not in LOG_LEVELS:
        level = "INFO"
    return level


def configure_logging(
    level: str | None = None,
    use_rich: bool = False,
) -> None:
    """Configure root logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses WGRAPH_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful console output.
    """
    log_level = getattr(logging, _resolve_level(level))

    console_handler: logging.Handler
    if use_rich:
        from rich.logging import RichHandler

        console_handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        console_handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(
        level=log_level,
        handlers=[console_handler],
        force=True,
    )


def configure_logging_from_config(config: LoggingConfig) -> None:
    """Apply the ``[logging]`` section of a loaded config."""
    configure_logging(level=config.level, use_rich=config.use_rich)
