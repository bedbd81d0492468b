"""svnstate CLI: Typer application over captured svn output."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from svnstate import __version__

app = typer.Typer(
    name="svnstate",
    help="Parse captured svn output into working-copy state.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

FILE_HELP = "Captured command output, or - for stdin"
XML_HELP = "Force XML or plain-text parsing (default: detect)"


@dataclass
class _Options:
    config: Optional[str] = None
    format: Optional[str] = None
    verbose: bool = False
    debug: bool = False


def _options(ctx: typer.Context) -> _Options:
    return ctx.obj if isinstance(ctx.obj, _Options) else _Options()


def _load(ctx: typer.Context):
    """Load config, apply global flags, configure logging; exit 2 on failure."""
    from svnstate.config.loader import ConfigError, load_config

    opts = _options(ctx)
    try:
        cfg = load_config(Path.cwd(), opts.config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if opts.format:
        if opts.format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {opts.format}")
            raise typer.Exit(code=2)
        cfg.output.format = opts.format  # type: ignore[assignment]

    level = _LOG_LEVELS.get(cfg.logging.level, logging.WARNING)
    if opts.verbose:
        level = logging.INFO
    if opts.debug:
        level = logging.DEBUG
    _configure_logging(level)
    return cfg


def _configure_logging(level: int) -> None:
    from rich.logging import RichHandler

    logger = logging.getLogger("svnstate")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(level)


def _read_input(source: str) -> str:
    """Read *source* (a path, or - for stdin); exit 2 if unreadable."""
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        console.print(f"[bold red]Cannot read {source}:[/bold red] {exc.strerror or exc}")
        raise typer.Exit(code=2) from exc


def _is_xml(cfg, text: str, xml: Optional[bool]) -> bool:
    from svnstate.svn.xmlutil import looks_like_xml

    if xml is not None:
        return xml
    if cfg.parse.format == "xml":
        return True
    if cfg.parse.format == "text":
        return False
    return looks_like_xml(text)


# ── status ────────────────────────────────────────────────────────────────────


@app.command()
def status(
    ctx: typer.Context,
    file: str = typer.Argument(..., help=FILE_HELP),
    tree: Optional[str] = typer.Option(None, "--tree", metavar="ROOT", help="Show as a tree rooted at ROOT"),
    xml: Optional[bool] = typer.Option(None, "--xml/--text", help=XML_HELP),
    only: str = typer.Option(
        "all", "--only", help="Keep one change kind: all | modified | added | deleted | conflicted | unversioned | local",
    ),
    name: Optional[str] = typer.Option(None, "--name", help="Keep paths containing this text (case-insensitive)"),
) -> None:
    """Show `svn status` output as a table or tree."""
    from svnstate.output import json_report, terminal
    from svnstate.svn.status_parser import StatusParser
    from svnstate.workingcopy.filters import StatusFilter, filter_statuses
    from svnstate.workingcopy.summary import summarise
    from svnstate.workingcopy.tree import build_status_tree

    cfg = _load(ctx)
    try:
        kind = StatusFilter(only.lower())
    except ValueError:
        console.print(f"[bold red]Invalid filter:[/bold red] {only}")
        raise typer.Exit(code=2) from None
    text = _read_input(file)

    parser = StatusParser(probe_filesystem=cfg.parse.probe_filesystem)
    if _is_xml(cfg, text, xml):
        statuses = parser.parse_structured(text)
    else:
        statuses = parser.parse_text(text)
    logging.getLogger(__name__).info("parsed %d status entries", len(statuses))
    summary = summarise(statuses) if cfg.output.show_summary else None
    shown = statuses = filter_statuses(statuses, kind, name)
    if tree is not None:
        shown = build_status_tree(
            statuses, tree, case_insensitive=cfg.tree.case_insensitive_root
        )

    if cfg.output.format == "json":
        print(json_report.render_statuses(shown, summary))
    elif tree is not None:
        terminal.render_status_tree(shown, title=tree or ".", summary=summary)
    else:
        terminal.render_statuses(shown, summary=summary)


# ── log ───────────────────────────────────────────────────────────────────────


@app.command()
def log(
    ctx: typer.Context,
    file: str = typer.Argument(..., help=FILE_HELP),
    xml: Optional[bool] = typer.Option(None, "--xml/--text", help=XML_HELP),
) -> None:
    """Show `svn log` output as a history table."""
    from svnstate.output import json_report, terminal
    from svnstate.svn.log_parser import LogParser

    cfg = _load(ctx)
    text = _read_input(file)

    parser = LogParser()
    entries = parser.parse_structured(text) if _is_xml(cfg, text, xml) else parser.parse_text(text)

    if cfg.output.format == "json":
        print(json_report.render({
            "version": "1.0",
            "entries": [json_report.commit_to_dict(e) for e in entries],
        }))
    else:
        terminal.render_log(entries)


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command()
def diff(
    ctx: typer.Context,
    file: str = typer.Argument(..., help=FILE_HELP),
    split: bool = typer.Option(False, "--split", help="Treat input as several files split at Index: lines"),
) -> None:
    """Classify `svn diff` output."""
    from svnstate.output import json_report, terminal
    from svnstate.svn.diff_parser import DiffParser

    cfg = _load(ctx)
    text = _read_input(file)

    parser = DiffParser()
    results = parser.parse_multiple(text) if split else [parser.parse(text)]

    if cfg.output.format == "json":
        print(json_report.render({
            "version": "1.0",
            "files": [json_report.diff_to_dict(r) for r in results],
        }))
    else:
        terminal.render_diff(results)


@app.command()
def compare(
    ctx: typer.Context,
    original: str = typer.Argument(..., help="Original file"),
    modified: str = typer.Argument(..., help="Modified file"),
) -> None:
    """Line-by-line comparison of two files (position aligned)."""
    from svnstate.output import json_report, terminal
    from svnstate.svn.diff_parser import build_naive_diff

    cfg = _load(ctx)
    result = build_naive_diff(
        _read_input(original),
        _read_input(modified),
        original_path=original,
        modified_path=modified,
    )

    if cfg.output.format == "json":
        print(json_report.render(json_report.diff_to_dict(result)))
    else:
        terminal.render_diff([result])


# ── info / ls / blame ─────────────────────────────────────────────────────────


@app.command()
def info(
    ctx: typer.Context,
    file: str = typer.Argument(..., help=FILE_HELP),
    xml: Optional[bool] = typer.Option(None, "--xml/--text", help=XML_HELP),
) -> None:
    """Show `svn info` output."""
    from svnstate.output import json_report, terminal
    from svnstate.svn.info_parser import InfoParser

    cfg = _load(ctx)
    text = _read_input(file)

    parser = InfoParser()
    if _is_xml(cfg, text, xml):
        infos = parser.parse_structured_all(text)
    else:
        infos = [parser.parse_text(text)] if text.strip() else []

    if cfg.output.format == "json":
        print(json_report.render({
            "version": "1.0",
            "items": [json_report.info_to_dict(i) for i in infos],
        }))
    else:
        terminal.render_info(infos)


@app.command(name="ls")
def list_entries(
    ctx: typer.Context,
    file: str = typer.Argument(..., help=FILE_HELP),
    xml: Optional[bool] = typer.Option(None, "--xml/--text", help=XML_HELP),
) -> None:
    """Show `svn list` output."""
    from svnstate.output import json_report, terminal
    from svnstate.svn.list_parser import ListParser

    cfg = _load(ctx)
    text = _read_input(file)

    parser = ListParser()
    entries = parser.parse_structured(text) if _is_xml(cfg, text, xml) else parser.parse_text(text)

    if cfg.output.format == "json":
        print(json_report.render({
            "version": "1.0",
            "entries": [json_report.entry_to_dict(e) for e in entries],
        }))
    else:
        terminal.render_list(entries)


@app.command()
def blame(
    ctx: typer.Context,
    file: str = typer.Argument(..., help=FILE_HELP),
    xml: Optional[bool] = typer.Option(None, "--xml/--text", help=XML_HELP),
) -> None:
    """Show `svn blame` output with per-author counts."""
    from svnstate.output import json_report, terminal
    from svnstate.svn.blame_parser import BlameParser

    cfg = _load(ctx)
    text = _read_input(file)
    path = "" if file == "-" else file

    parser = BlameParser()
    if _is_xml(cfg, text, xml):
        result = parser.parse_structured(text)
    else:
        result = parser.parse_text(text, path=path)

    if cfg.output.format == "json":
        print(json_report.render(json_report.blame_to_dict(result)))
    else:
        terminal.render_blame(result)


# ── props ─────────────────────────────────────────────────────────────────────


@app.command()
def props(
    ctx: typer.Context,
    file: str = typer.Argument(..., help=FILE_HELP),
    xml: Optional[bool] = typer.Option(None, "--xml/--text", help=XML_HELP),
    builtin: Optional[bool] = typer.Option(
        None, "--builtin/--custom", help="Keep only svn: properties, or only the others",
    ),
) -> None:
    """Show `svn proplist` output."""
    from svnstate.output import json_report, terminal
    from svnstate.svn.property_parser import PropertyParser

    cfg = _load(ctx)
    text = _read_input(file)

    parser = PropertyParser()
    found = parser.parse_structured(text) if _is_xml(cfg, text, xml) else parser.parse_text(text)
    if builtin is not None:
        found = [p for p in found if p.is_svn_property == builtin]

    if cfg.output.format == "json":
        print(json_report.render({
            "version": "1.0",
            "properties": [json_report.property_to_dict(p) for p in found],
        }))
    else:
        terminal.render_properties(found)


# ── actions ───────────────────────────────────────────────────────────────────


@app.command()
def actions(
    ctx: typer.Context,
    status_name: str = typer.Argument(..., metavar="STATUS", help="Status word (modified) or char (M)"),
) -> None:
    """List the actions allowed for a file in STATUS."""
    from svnstate.output import json_report, terminal
    from svnstate.svn.codes import parse_status
    from svnstate.workingcopy import state_machine as sm

    cfg = _load(ctx)
    code = parse_status(status_name)
    if code is None:
        console.print(f"[bold red]Unknown status:[/bold red] {status_name!r}")
        raise typer.Exit(code=2)

    if cfg.output.format == "json":
        recommended = sm.recommended_action(code)
        print(json_report.render({
            "status": code.value,
            "actions": {
                a.value: sm.next_state(code, a)
                for a in sorted(sm.valid_actions(code), key=lambda a: a.value)
            },
            "recommended": recommended.value if recommended else None,
            "can_commit": sm.can_commit(code),
            "can_revert": sm.can_revert(code),
            "can_delete": sm.can_delete(code),
            "has_local_modifications": sm.has_local_modifications(code),
        }))
    else:
        terminal.render_actions(code)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Generate a starter .svnstate.toml in the current directory."""
    from svnstate.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"svnstate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .svnstate.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging, including skipped input lines"),
) -> None:
    """svnstate: parse captured svn output into working-copy state."""
    ctx.obj = _Options(config=config, format=format, verbose=verbose, debug=debug)
