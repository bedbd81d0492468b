"""Configuration schema: dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ParseFormat = Literal["auto", "text", "xml"]
OutputFormat = Literal["terminal", "json"]
LogLevel = Literal["debug", "info", "warning", "error"]

PARSE_FORMATS = ("auto", "text", "xml")
OUTPUT_FORMATS = ("terminal", "json")
LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class ParseConfig:
    format: ParseFormat = "auto"
    probe_filesystem: bool = False  # stat paths to tell files from directories


@dataclass
class TreeConfig:
    case_insensitive_root: bool = True


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class LoggingConfig:
    level: LogLevel = "warning"


@dataclass
class SvnStateConfig:
    version: str = "1.0"
    parse: ParseConfig = field(default_factory=ParseConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
