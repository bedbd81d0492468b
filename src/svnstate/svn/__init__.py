"""Parsers and code tables for svn command output."""

from svnstate.svn.blame_parser import BlameParser
from svnstate.svn.diff_parser import DiffParser, build_naive_diff
from svnstate.svn.info_parser import InfoParser
from svnstate.svn.list_parser import ListParser
from svnstate.svn.log_parser import LogParser
from svnstate.svn.models import (
    BlameLine,
    BlameResult,
    ChangedPath,
    CommitEntry,
    ConflictInfo,
    CopySource,
    Depth,
    DiffLine,
    DiffLineKind,
    DiffResult,
    FileStatus,
    ItemInfo,
    LockInfo,
    NodeKind,
    PathAction,
    Property,
    RepositoryEntry,
    StatusCode,
)
from svnstate.svn.property_parser import PropertyParser
from svnstate.svn.status_parser import StatusParser

__all__ = [
    "BlameLine",
    "BlameParser",
    "BlameResult",
    "ChangedPath",
    "CommitEntry",
    "ConflictInfo",
    "CopySource",
    "Depth",
    "DiffLine",
    "DiffLineKind",
    "DiffParser",
    "DiffResult",
    "FileStatus",
    "InfoParser",
    "ItemInfo",
    "ListParser",
    "LockInfo",
    "LogParser",
    "NodeKind",
    "PathAction",
    "Property",
    "PropertyParser",
    "RepositoryEntry",
    "StatusCode",
    "StatusParser",
    "build_naive_diff",
]
