"""Rich terminal reporter for parsed svn records."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from svnstate.svn.models import (
    BlameResult,
    CommitEntry,
    DiffLineKind,
    DiffResult,
    FileStatus,
    ItemInfo,
    Property,
    RepositoryEntry,
    StatusCode,
)
from svnstate.svn.codes import status_to_char
from svnstate.workingcopy.state_machine import (
    can_commit,
    can_delete,
    can_revert,
    describe_action,
    has_local_modifications,
    next_state,
    recommended_action,
    valid_actions,
)
from svnstate.workingcopy.summary import ChangeSummary

_STATUS_STYLE = {
    StatusCode.MODIFIED: "yellow",
    StatusCode.ADDED: "green",
    StatusCode.DELETED: "red",
    StatusCode.REPLACED: "magenta",
    StatusCode.CONFLICTED: "bold white on red",
    StatusCode.UNVERSIONED: "dim",
    StatusCode.MISSING: "bold red",
    StatusCode.OBSTRUCTED: "bold yellow",
    StatusCode.INCOMPLETE: "bold yellow",
    StatusCode.IGNORED: "dim",
}

_DIFF_STYLE = {
    DiffLineKind.ADDITION: "green",
    DiffLineKind.DELETION: "red",
    DiffLineKind.HEADER: "bold",
    DiffLineKind.HUNK_HEADER: "cyan",
}


def _status_pill(code: StatusCode) -> Text:
    return Text(f" {status_to_char(code)} ", style=_STATUS_STYLE.get(code, ""))


def _date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value is not None else "-"


def _opt(value: object) -> str:
    return "-" if value is None else str(value)


def render_statuses(
    statuses: Sequence[FileStatus],
    *,
    summary: Optional[ChangeSummary] = None,
    console: Optional[Console] = None,
) -> None:
    """Print a flat status listing as a table."""
    console = console or Console()

    if not statuses:
        console.print("[bold green]Working copy is clean.[/bold green]")
    else:
        table = Table(title="Working copy status", title_style="bold", border_style="dim")
        table.add_column("St", justify="center", width=4)
        table.add_column("Pr", justify="center", width=4)
        table.add_column("Path", style="magenta")
        table.add_column("Rev", justify="right", style="green")
        table.add_column("Status")
        table.add_column("Flags", style="dim")

        for status in statuses:
            flags = []
            if status.is_locked:
                flags.append("locked")
            if status.tree_conflict:
                flags.append("tree-conflict")
            table.add_row(
                _status_pill(status.working_copy_status),
                _status_pill(status.property_status),
                status.path,
                _opt(status.revision),
                status.display_status,
                ", ".join(flags),
            )
        console.print(table)

    if summary is not None:
        _print_summary(console, summary)


def render_status_tree(
    roots: Sequence[FileStatus],
    *,
    title: str = ".",
    summary: Optional[ChangeSummary] = None,
    console: Optional[Console] = None,
) -> None:
    """Print a status tree built by ``build_status_tree``."""
    console = console or Console()
    tree = Tree(Text(title, style="bold"))

    def add(branch: Tree, node: FileStatus) -> None:
        label = Text(node.name + ("/" if node.is_directory else ""))
        if node.working_copy_status != StatusCode.NONE:
            label.append(f"  [{node.display_status}]", style=_STATUS_STYLE.get(node.working_copy_status, ""))
        child = branch.add(label)
        for grandchild in node.children:
            add(child, grandchild)

    for root in roots:
        add(tree, root)
    console.print(tree)

    if summary is not None:
        _print_summary(console, summary)


def _print_summary(console: Console, summary: ChangeSummary) -> None:
    console.print()
    console.print(f"[dim]Entries:[/dim]       {summary.total}")
    console.print(f"[dim]Modified:[/dim]      {summary.modified}")
    console.print(f"[dim]Added:[/dim]         {summary.added}")
    console.print(f"[dim]Deleted:[/dim]       {summary.deleted}")
    console.print(f"[dim]Conflicted:[/dim]    {summary.conflicted}")
    console.print(f"[dim]Unversioned:[/dim]   {summary.unversioned}")
    console.print(f"[dim]Missing:[/dim]       {summary.missing}")
    if summary.has_uncommitted_changes:
        console.print("[bold yellow]Uncommitted local changes present.[/bold yellow]")


def render_log(entries: Sequence[CommitEntry], *, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not entries:
        console.print("[dim]No log entries.[/dim]")
        return

    table = Table(title="History", show_lines=True, title_style="bold", border_style="dim")
    table.add_column("Rev", justify="right", style="green")
    table.add_column("Author", style="cyan")
    table.add_column("Date")
    table.add_column("Message")
    table.add_column("Paths", style="magenta")

    for entry in entries:
        paths = "\n".join(
            f"{cp.action.value[0].upper()} {cp.path}"
            + (f" (from {cp.copy_source.path}:r{cp.copy_source.revision})" if cp.copy_source else "")
            for cp in entry.changed_paths
        )
        table.add_row(
            entry.display_revision,
            entry.author,
            _date(entry.timestamp),
            entry.message,
            paths,
        )
    console.print(table)


def render_diff(results: Sequence[DiffResult], *, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not results or all(not r.lines and not r.is_binary for r in results):
        console.print("[dim]No differences.[/dim]")
        return

    for result in results:
        if result.is_binary:
            console.print(f"[bold]{result.path or 'binary'}[/bold]: [yellow]{result.binary_message}[/yellow]")
            continue
        for line in result.lines:
            console.print(Text(line.content, style=_DIFF_STYLE.get(line.kind, "")))
        console.print(
            f"[dim]{result.path or '(unnamed)'}: "
            f"+{result.addition_count} -{result.deletion_count} "
            f"in {result.hunk_count} hunk(s)[/dim]"
        )


def render_info(infos: Sequence[ItemInfo], *, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not infos:
        console.print("[dim]No info.[/dim]")
        return

    for info in infos:
        table = Table(title=info.path or "Item", show_header=False, title_style="bold", border_style="dim")
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        rows = [
            ("URL", info.url),
            ("Relative URL", info.relative_url),
            ("Repository Root", info.repository_root_url),
            ("Repository UUID", info.repository_uuid),
            ("Working Copy Root", info.working_copy_root),
            ("Revision", str(info.revision)),
            ("Node Kind", info.node_kind),
            ("Schedule", info.schedule),
            ("Depth", info.depth.value),
            ("Last Changed Author", _opt(info.last_changed_author)),
            ("Last Changed Rev", str(info.last_changed_revision)),
            ("Last Changed Date", _date(info.last_changed_date)),
        ]
        if info.copy_from_url:
            rows.append(("Copied From", f"{info.copy_from_url}@{_opt(info.copy_from_revision)}"))
        if info.lock:
            rows.append(("Lock Owner", _opt(info.lock.owner)))
            rows.append(("Lock Comment", _opt(info.lock.comment)))
        if info.conflict:
            rows.append(("Conflict Files", ", ".join(
                f for f in (info.conflict.old_file, info.conflict.working_file, info.conflict.new_file) if f
            )))
        if info.tree_conflict:
            rows.append(("Tree Conflict", info.tree_conflict))
        for field, value in rows:
            if value:
                table.add_row(field, value)
        console.print(table)


def render_list(entries: Sequence[RepositoryEntry], *, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not entries:
        console.print("[dim]Empty listing.[/dim]")
        return

    table = Table(title="Repository listing", title_style="bold", border_style="dim")
    table.add_column("Name", style="magenta")
    table.add_column("Rev", justify="right", style="green")
    table.add_column("Author", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Date")
    for entry in entries:
        name = entry.display_name + ("/" if entry.is_directory else "")
        if entry.is_locked:
            name += " [locked]"
        table.add_row(name, _opt(entry.revision), _opt(entry.author), _opt(entry.size), _date(entry.date))
    console.print(table)


def render_properties(props: Sequence[Property], *, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not props:
        console.print("[dim]No properties.[/dim]")
        return

    table = Table(title="Properties", title_style="bold", border_style="dim")
    table.add_column("Path", style="magenta")
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    for prop in props:
        label = prop.display_name
        if label != prop.name:
            label = f"{label} [dim]({prop.name})[/dim]"
        table.add_row(prop.path or ".", label, prop.value)
    console.print(table)


def render_blame(result: BlameResult, *, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not result.lines:
        console.print("[dim]No blame lines.[/dim]")
        return

    table = Table(title=result.path or "Blame", title_style="bold", border_style="dim", box=None)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Rev", justify="right", style="green")
    table.add_column("Author", style="cyan")
    table.add_column("Content")
    for line in result.lines:
        rev = _opt(line.revision) + ("*" if line.is_merged else "")
        table.add_row(str(line.line_no), rev, _opt(line.author), line.content)
    console.print(table)

    authors = ", ".join(f"{a} ({n})" for a, n in sorted(result.author_line_count.items()))
    if authors:
        console.print(f"[dim]Authors:[/dim] {authors}")


def render_actions(status: StatusCode, *, console: Optional[Console] = None) -> None:
    """Print what can be done to a file in *status*."""
    console = console or Console()
    label = "normal" if status == StatusCode.NONE else status.value

    actions = sorted(valid_actions(status), key=lambda a: a.value)
    if not actions:
        console.print(f"[dim]No actions available for {label} files.[/dim]")
    else:
        table = Table(title=f"Actions for {label} files", title_style="bold", border_style="dim")
        table.add_column("Action", style="cyan")
        table.add_column("Result")
        table.add_column("Description")
        for action in actions:
            result = next_state(status, action)
            table.add_row(
                action.value,
                "normal" if result == StatusCode.NONE else _opt(result and result.value),
                describe_action(action, status),
            )
        console.print(table)

    recommended = recommended_action(status)
    console.print(f"[dim]Recommended:[/dim]   {recommended.value if recommended else '-'}")
    console.print(
        f"[dim]Flags:[/dim]         commit={can_commit(status)} revert={can_revert(status)} "
        f"delete={can_delete(status)} modified={has_local_modifications(status)}"
    )
