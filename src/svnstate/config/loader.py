"""Load and merge configuration from .svnstate.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from svnstate.config.defaults import CONFIG_FILENAME
from svnstate.config.schema import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    PARSE_FORMATS,
    LoggingConfig,
    OutputConfig,
    ParseConfig,
    SvnStateConfig,
    TreeConfig,
)


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: SvnStateConfig) -> None:
    """Apply SVNSTATE_* environment variable overrides."""
    if val := os.environ.get("SVNSTATE_PARSE_FORMAT"):
        if val.lower() in PARSE_FORMATS:
            cfg.parse.format = val.lower()  # type: ignore[assignment]
    if val := os.environ.get("SVNSTATE_PROBE_FS"):
        cfg.parse.probe_filesystem = val.lower() in ("1", "true", "yes")
    if val := os.environ.get("SVNSTATE_OUTPUT_FORMAT"):
        if val.lower() in OUTPUT_FORMATS:
            cfg.output.format = val.lower()  # type: ignore[assignment]
    if val := os.environ.get("SVNSTATE_LOG_LEVEL"):
        if val.lower() in LOG_LEVELS:
            cfg.logging.level = val.lower()  # type: ignore[assignment]


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: SvnStateConfig) -> None:
    if cfg.parse.format not in PARSE_FORMATS:
        raise ConfigError(f"parse.format must be one of {', '.join(PARSE_FORMATS)}")
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"output.format must be one of {', '.join(OUTPUT_FORMATS)}")
    if cfg.logging.level not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}")


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> SvnStateConfig:
    """Load, validate, and return a SvnStateConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = SvnStateConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = SvnStateConfig(
            version=str(raw.get("version", "1.0")),
            parse=_build_section(raw, ParseConfig, "parse"),
            tree=_build_section(raw, TreeConfig, "tree"),
            output=_build_section(raw, OutputConfig, "output"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
