"""JSON reporter for parsed svn records."""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from svnstate.svn.models import (
    BlameResult,
    CommitEntry,
    DiffResult,
    FileStatus,
    ItemInfo,
    Property,
    RepositoryEntry,
)
from svnstate.workingcopy.summary import ChangeSummary


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def status_to_dict(status: FileStatus) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "path": status.path,
        "kind": status.node_kind.value,
        "status": status.working_copy_status.value,
        "props": status.property_status.value,
        "repository": status.repository_status.value,
        "revision": status.revision,
        "last_changed_revision": status.last_changed_revision,
        "last_changed_author": status.last_changed_author,
        "locked": status.is_locked,
        "conflict": status.has_conflict,
        **({"tree_conflict": status.tree_conflict} if status.tree_conflict else {}),
    }
    if status.children:
        data["children"] = [status_to_dict(child) for child in status.children]
    return data


def summary_to_dict(summary: ChangeSummary) -> Dict[str, Any]:
    return {
        "total": summary.total,
        "modified": summary.modified,
        "added": summary.added,
        "deleted": summary.deleted,
        "conflicted": summary.conflicted,
        "unversioned": summary.unversioned,
        "missing": summary.missing,
        "has_uncommitted_changes": summary.has_uncommitted_changes,
    }


def commit_to_dict(entry: CommitEntry) -> Dict[str, Any]:
    paths: List[Dict[str, Any]] = []
    for changed in entry.changed_paths:
        paths.append({
            "path": changed.path,
            "action": changed.action.value,
            **(
                {"copy_from": {"path": changed.copy_source.path,
                               "revision": changed.copy_source.revision}}
                if changed.copy_source else {}
            ),
        })
    return {
        "revision": entry.revision,
        "author": entry.author,
        "date": _iso(entry.timestamp),
        "message": entry.message,
        "changed_paths": paths,
    }


def diff_to_dict(result: DiffResult) -> Dict[str, Any]:
    if result.is_binary:
        return {"path": result.path, "binary": True, "message": result.binary_message}
    return {
        "path": result.path,
        "binary": False,
        "additions": result.addition_count,
        "deletions": result.deletion_count,
        "hunks": result.hunk_count,
        "lines": [
            {
                "kind": line.kind.value,
                "content": line.content,
                "original": line.original_line_no,
                "modified": line.modified_line_no,
            }
            for line in result.lines
        ],
    }


def info_to_dict(info: ItemInfo) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "path": info.path,
        "url": info.url,
        "relative_url": info.relative_url,
        "repository_root": info.repository_root_url,
        "repository_uuid": info.repository_uuid,
        "working_copy_root": info.working_copy_root,
        "revision": info.revision,
        "kind": info.node_kind,
        "schedule": info.schedule,
        "depth": info.depth.value,
        "last_changed_author": info.last_changed_author,
        "last_changed_revision": info.last_changed_revision,
        "last_changed_date": _iso(info.last_changed_date),
    }
    if info.copy_from_url:
        data["copy_from"] = {"url": info.copy_from_url, "revision": info.copy_from_revision}
    if info.lock:
        data["lock"] = {
            "owner": info.lock.owner,
            "token": info.lock.token,
            "comment": info.lock.comment,
            "created": _iso(info.lock.created),
        }
    if info.conflict:
        data["conflict"] = {
            "old": info.conflict.old_file,
            "working": info.conflict.working_file,
            "new": info.conflict.new_file,
        }
    if info.tree_conflict:
        data["tree_conflict"] = info.tree_conflict
    return data


def entry_to_dict(entry: RepositoryEntry) -> Dict[str, Any]:
    return {
        "name": entry.display_name,
        "kind": entry.kind.value,
        "revision": entry.revision,
        "author": entry.author,
        "date": _iso(entry.date),
        "size": entry.size,
        "locked": entry.is_locked,
    }


def property_to_dict(prop: Property) -> Dict[str, Any]:
    return {
        "path": prop.path,
        "name": prop.name,
        "value": prop.value,
        "builtin": prop.is_svn_property,
    }


def blame_to_dict(result: BlameResult) -> Dict[str, Any]:
    return {
        "path": result.path,
        "authors": result.author_line_count,
        "revisions": result.unique_revisions,
        "lines": [
            {
                "line": line.line_no,
                "revision": line.revision,
                "author": line.author,
                "date": _iso(line.date),
                "content": line.content,
                **({"merged": True} if line.is_merged else {}),
            }
            for line in result.lines
        ],
    }


def _default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"not JSON serialisable: {type(value).__name__}")


def render(payload: Any) -> str:
    """Return formatted JSON string."""
    return json.dumps(payload, indent=2, default=_default)


def render_statuses(
    statuses: Sequence[FileStatus],
    summary: Optional[ChangeSummary] = None,
) -> str:
    payload: Dict[str, Any] = {
        "version": "1.0",
        "entries": [status_to_dict(s) for s in statuses],
    }
    if summary is not None:
        payload["summary"] = summary_to_dict(summary)
    return render(payload)
