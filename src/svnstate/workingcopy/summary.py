"""Change counts for a flat status listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from svnstate.svn.models import FileStatus, StatusCode


@dataclass(frozen=True)
class ChangeSummary:
    total: int = 0
    modified: int = 0
    added: int = 0
    deleted: int = 0
    conflicted: int = 0
    unversioned: int = 0
    missing: int = 0
    has_uncommitted_changes: bool = False


def summarise(statuses: Iterable[FileStatus]) -> ChangeSummary:
    counts = {
        StatusCode.MODIFIED: 0,
        StatusCode.ADDED: 0,
        StatusCode.DELETED: 0,
        StatusCode.CONFLICTED: 0,
        StatusCode.UNVERSIONED: 0,
        StatusCode.MISSING: 0,
    }
    total = 0
    dirty = False
    for status in statuses:
        total += 1
        code = status.working_copy_status
        if code in counts:
            counts[code] += 1
        dirty = dirty or status.has_local_modifications

    return ChangeSummary(
        total=total,
        modified=counts[StatusCode.MODIFIED],
        added=counts[StatusCode.ADDED],
        deleted=counts[StatusCode.DELETED],
        conflicted=counts[StatusCode.CONFLICTED],
        unversioned=counts[StatusCode.UNVERSIONED],
        missing=counts[StatusCode.MISSING],
        has_uncommitted_changes=dirty,
    )
