"""Configuration loading, schema, and defaults."""

from svnstate.config.loader import ConfigError, load_config
from svnstate.config.schema import SvnStateConfig

__all__ = [
    "ConfigError",
    "SvnStateConfig",
    "load_config",
]
