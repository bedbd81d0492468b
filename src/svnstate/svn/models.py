"""Data models for parsed svn output."""

from __future__ import annotations

import posixpath
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple

# Default timestamp for records whose date could not be parsed.
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class StatusCode(str, Enum):
    NONE = "none"
    NORMAL = "none"  # alias: svn prints a blank for both
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"
    REPLACED = "replaced"
    CONFLICTED = "conflicted"
    IGNORED = "ignored"
    UNVERSIONED = "unversioned"
    MISSING = "missing"
    OBSTRUCTED = "obstructed"
    INCOMPLETE = "incomplete"
    EXTERNAL = "external"
    MERGED = "merged"


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "dir"
    UNKNOWN = "unknown"


class PathAction(str, Enum):
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"
    REPLACED = "replaced"


class DiffLineKind(str, Enum):
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"
    HEADER = "header"
    HUNK_HEADER = "hunk_header"


class Depth(str, Enum):
    UNKNOWN = "unknown"
    EXCLUDE = "exclude"
    EMPTY = "empty"
    FILES = "files"
    IMMEDIATES = "immediates"
    INFINITY = "infinity"


def _basename(path: str) -> str:
    trimmed = path.replace("\\", "/").rstrip("/")
    return posixpath.basename(trimmed) or path


# --- status ---


@dataclass(frozen=True)
class FileStatus:
    """One path's version-control state.

    ``children`` is only filled in by the tree builder; parsers always
    return flat records.
    """

    path: str
    node_kind: NodeKind = NodeKind.UNKNOWN
    working_copy_status: StatusCode = StatusCode.NONE
    repository_status: StatusCode = StatusCode.NONE
    property_status: StatusCode = StatusCode.NONE
    revision: Optional[int] = None
    last_changed_revision: Optional[int] = None
    last_changed_author: Optional[str] = None
    is_locked: bool = False
    has_conflict: bool = False
    tree_conflict: Optional[str] = None
    children: Tuple["FileStatus", ...] = ()

    @property
    def name(self) -> str:
        return _basename(self.path)

    @property
    def is_directory(self) -> bool:
        return self.node_kind == NodeKind.DIRECTORY

    @property
    def has_local_modifications(self) -> bool:
        from svnstate.workingcopy.state_machine import has_local_modifications

        return has_local_modifications(self.working_copy_status)

    @property
    def display_status(self) -> str:
        """Working-copy status, else repository status, else ``normal``."""
        if self.working_copy_status != StatusCode.NONE:
            return self.working_copy_status.value
        if self.repository_status != StatusCode.NONE:
            return f"{self.repository_status.value} (out of date)"
        return "normal"


# --- log ---


class CopySource(NamedTuple):
    path: str
    revision: int


@dataclass(frozen=True)
class ChangedPath:
    """A path touched by a commit."""

    path: str
    action: PathAction = PathAction.MODIFIED
    copy_source: Optional[CopySource] = None

    @property
    def file_name(self) -> str:
        return _basename(self.path)


@dataclass(frozen=True)
class CommitEntry:
    """One revision from ``svn log``."""

    revision: int
    author: str = ""
    timestamp: datetime = EPOCH
    message: str = ""
    changed_paths: Tuple[ChangedPath, ...] = ()

    @property
    def display_revision(self) -> str:
        return f"r{self.revision}"

    @property
    def has_changed_paths(self) -> bool:
        return bool(self.changed_paths)


# --- diff ---


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A single classified line of a diff."""

    kind: DiffLineKind
    content: str
    original_line_no: Optional[int] = None
    modified_line_no: Optional[int] = None


@dataclass(frozen=True)
class DiffResult:
    """Classified diff lines, or a binary-file marker (never both)."""

    lines: Tuple[DiffLine, ...] = ()
    is_binary: bool = False
    binary_message: Optional[str] = None
    path: str = ""
    original_path: str = ""
    modified_path: str = ""

    def __post_init__(self) -> None:
        if self.is_binary and self.lines:
            raise ValueError("a binary diff result cannot carry lines")

    @classmethod
    def binary(cls, message: str, path: str = "") -> "DiffResult":
        return cls(is_binary=True, binary_message=message, path=path)

    def _count(self, kind: DiffLineKind) -> int:
        return sum(1 for line in self.lines if line.kind == kind)

    @property
    def addition_count(self) -> int:
        return self._count(DiffLineKind.ADDITION)

    @property
    def deletion_count(self) -> int:
        return self._count(DiffLineKind.DELETION)

    @property
    def hunk_count(self) -> int:
        return self._count(DiffLineKind.HUNK_HEADER)

    @property
    def file_extension(self) -> Optional[str]:
        _, ext = posixpath.splitext(self.path.replace("\\", "/"))
        return ext or None


# --- info ---


@dataclass(frozen=True)
class LockInfo:
    owner: Optional[str] = None
    token: Optional[str] = None
    comment: Optional[str] = None
    created: Optional[datetime] = None


@dataclass(frozen=True)
class ConflictInfo:
    """Files svn leaves behind for a text conflict."""

    old_file: Optional[str] = None
    working_file: Optional[str] = None
    new_file: Optional[str] = None


@dataclass(frozen=True)
class ItemInfo:
    """Metadata for a single item from ``svn info``."""

    path: str = ""
    url: str = ""
    relative_url: str = ""
    repository_root_url: str = ""
    repository_uuid: str = ""
    working_copy_root: str = ""
    revision: int = 0
    node_kind: str = ""
    schedule: str = ""
    last_changed_author: Optional[str] = None
    last_changed_revision: int = 0
    last_changed_date: Optional[datetime] = None
    depth: Depth = Depth.UNKNOWN
    copy_from_url: Optional[str] = None
    copy_from_revision: Optional[int] = None
    lock: Optional[LockInfo] = None
    conflict: Optional[ConflictInfo] = None
    tree_conflict: Optional[str] = None

    @property
    def is_locked(self) -> bool:
        return self.lock is not None

    @property
    def has_conflict(self) -> bool:
        return self.conflict is not None or self.tree_conflict is not None

    @property
    def is_file(self) -> bool:
        return self.node_kind.lower() == "file"

    @property
    def is_directory(self) -> bool:
        return self.node_kind.lower() in ("dir", "directory")


# --- list ---


@dataclass(frozen=True)
class RepositoryEntry:
    """An item from ``svn list``."""

    name: str
    kind: NodeKind = NodeKind.FILE
    revision: Optional[int] = None
    author: Optional[str] = None
    date: Optional[datetime] = None
    size: Optional[int] = None
    is_locked: bool = False

    @property
    def display_name(self) -> str:
        return self.name.rstrip("/\\")

    @property
    def is_directory(self) -> bool:
        return self.kind == NodeKind.DIRECTORY


# --- blame ---


@dataclass(frozen=True)
class BlameLine:
    line_no: int
    revision: Optional[int] = None
    author: Optional[str] = None
    date: Optional[datetime] = None
    content: str = ""
    is_merged: bool = False


@dataclass(frozen=True)
class BlameResult:
    path: str = ""
    lines: Tuple[BlameLine, ...] = ()

    @property
    def unique_revisions(self) -> list[int]:
        return sorted({ln.revision for ln in self.lines if ln.revision is not None})

    @property
    def unique_authors(self) -> list[str]:
        return sorted({ln.author for ln in self.lines if ln.author})

    @property
    def author_line_count(self) -> Dict[str, int]:
        return dict(Counter(ln.author for ln in self.lines if ln.author))

    @property
    def date_range(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        dates = [ln.date for ln in self.lines if ln.date is not None]
        if not dates:
            return None, None
        return min(dates), max(dates)


# --- properties ---

# Built-in svn: property names, with a display label and a one-line description.
BUILTIN_PROPERTIES: Dict[str, Tuple[str, str]] = {
    "svn:mime-type": ("MIME Type", "The MIME type of the file (e.g., 'text/plain', 'image/png')"),
    "svn:eol-style": ("EOL Style", "End-of-line style (native, CRLF, LF, CR)"),
    "svn:keywords": ("Keywords", "Keywords to expand (e.g., 'Id, Revision, Author, Date')"),
    "svn:executable": ("Executable", "Mark file as executable on Unix systems"),
    "svn:needs-lock": ("Needs Lock", "File must be locked before editing"),
    "svn:externals": ("Externals", "Definitions for external items"),
    "svn:ignore": ("Ignore", "Patterns for files to ignore"),
    "svn:auto-props": ("Auto Props", "Automatic property settings"),
    "svn:mergeinfo": ("Merge Info", "Merge history information"),
    "svn:special": ("Special", "Mark as special file (symlink)"),
    "svn:depth": ("Depth", "Working copy depth"),
}


def is_svn_property(name: str) -> bool:
    """True for names in the reserved ``svn:`` namespace, any case."""
    return name[:4].lower() == "svn:"


@dataclass(frozen=True)
class Property:
    name: str
    value: str = ""
    path: str = ""

    @property
    def is_svn_property(self) -> bool:
        return is_svn_property(self.name)

    @property
    def is_regular_property(self) -> bool:
        return not self.is_svn_property

    @property
    def display_name(self) -> str:
        label = BUILTIN_PROPERTIES.get(self.name)
        return label[0] if label else self.name

    @property
    def description(self) -> str:
        label = BUILTIN_PROPERTIES.get(self.name)
        return label[1] if label else ""
