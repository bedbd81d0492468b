"""Narrow a status listing by change kind and name."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from svnstate.svn.models import FileStatus, StatusCode


class StatusFilter(str, Enum):
    ALL = "all"
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    CONFLICTED = "conflicted"
    UNVERSIONED = "unversioned"
    LOCAL_CHANGES = "local"


_BY_CODE = {
    StatusFilter.MODIFIED: StatusCode.MODIFIED,
    StatusFilter.ADDED: StatusCode.ADDED,
    StatusFilter.DELETED: StatusCode.DELETED,
    StatusFilter.CONFLICTED: StatusCode.CONFLICTED,
    StatusFilter.UNVERSIONED: StatusCode.UNVERSIONED,
}


def matches(status: FileStatus, kind: StatusFilter = StatusFilter.ALL, text: Optional[str] = None) -> bool:
    """True when *status* passes both the text and the kind filter.

    *text* is a case-insensitive substring of the name or the path; blank
    text matches everything.
    """
    if text and text.strip():
        needle = text.lower()
        if needle not in status.name.lower() and needle not in status.path.lower():
            return False

    if kind == StatusFilter.LOCAL_CHANGES:
        return status.has_local_modifications
    code = _BY_CODE.get(kind)
    return code is None or status.working_copy_status == code


def filter_statuses(
    statuses: Iterable[FileStatus],
    kind: StatusFilter = StatusFilter.ALL,
    text: Optional[str] = None,
) -> List[FileStatus]:
    """Flat filter; order is preserved and children are not inspected."""
    return [s for s in statuses if matches(s, kind, text)]
