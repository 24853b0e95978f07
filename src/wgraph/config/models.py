"""Configuration models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field

from wgraph.types import DEFAULT_WEIGHT

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ConfigError(Exception):
    """Configuration error."""

    pass


class LoggingConfig(BaseModel):
    """Logging setup used by ``configure_logging``."""

    level: LogLevel = "INFO"
    use_rich: bool = False


class GraphConfig(BaseModel):
    """Defaults applied by GraphStore.

    ``default_weight`` is used when an edge is added without a weight.
    ``render_precision`` is the number of decimals printed per edge weight.
    """

    default_weight: float = DEFAULT_WEIGHT
    render_precision: int = Field(default=3, ge=0)


class WgraphConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
