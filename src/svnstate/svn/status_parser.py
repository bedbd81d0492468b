"""Parser for ``svn status`` output, plain and ``--xml``.

Text mode relies on the fixed column layout svn prints::

    M  1234 src/app.py
    ?       notes.txt

Column 0 is the working-copy status, column 1 the property status,
columns 2-6 the revision and the path starts at column 8. Lines that do not
fit are skipped; a bad line never aborts the listing.
"""

from __future__ import annotations

import logging
import os
import re
import xml.etree.ElementTree as ET
from typing import List, Optional

from svnstate.svn.codes import status_from_char, status_from_word
from svnstate.svn.models import FileStatus, NodeKind, StatusCode
from svnstate.svn.xmlutil import Document, as_root, child_text, parse_int

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"[\r\n]+")
_PATH_MARKERS = "+*SBCEO"
_MIN_LINE = 8
_NON_DATA_PREFIXES = ("Status against", "Performing status on", "--- Changelist")


class StatusParser:
    """Turn status output into a flat list of ``FileStatus`` records.

    With ``probe_filesystem`` set, paths whose kind cannot be read from the
    output are checked on disk (directory, else file). Without it they are
    reported as ``NodeKind.UNKNOWN``.
    """

    def __init__(self, *, probe_filesystem: bool = False) -> None:
        self._probe_filesystem = probe_filesystem

    # ---- text ----

    def parse_text(self, output: Optional[str]) -> List[FileStatus]:
        statuses: List[FileStatus] = []
        if not output or not output.strip():
            return statuses

        for line in _LINE_SPLIT_RE.split(output):
            stripped = line.strip()
            if len(stripped) < _MIN_LINE or stripped.startswith(_NON_DATA_PREFIXES):
                continue
            try:
                status = self._parse_line(line)
            except (ValueError, IndexError) as exc:
                logger.debug("skipping status line %r: %s", line, exc)
                continue
            if status is not None:
                statuses.append(status)
        return statuses

    def _parse_line(self, line: str) -> Optional[FileStatus]:
        if len(line) < _MIN_LINE:
            return None
        path = _strip_markers(line[_MIN_LINE:].strip())
        if not path:
            logger.debug("skipping status line without a path: %r", line)
            return None

        wc_status = status_from_char(line[0])
        prop_status = status_from_char(line[1])
        return _build_status(
            path=path,
            kind=self._node_kind(path, None),
            working_copy_status=wc_status,
            property_status=prop_status,
            revision=_parse_revision_field(line[2:7]),
        )

    # ---- xml ----

    def parse_structured(self, document: Document) -> List[FileStatus]:
        statuses: List[FileStatus] = []
        root = as_root(document)
        if root is None:
            return statuses

        for entry in root.iter("entry"):
            try:
                status = self._parse_entry(entry)
            except (ValueError, AttributeError, TypeError) as exc:
                logger.debug("skipping status entry %r: %s", entry.attrib, exc)
                continue
            if status is not None:
                statuses.append(status)
        return statuses

    def _parse_entry(self, entry: ET.Element) -> Optional[FileStatus]:
        path = entry.get("path")
        if not path:
            logger.debug("skipping status entry without a path attribute")
            return None

        wc_status = StatusCode.NONE
        prop_status = StatusCode.NONE
        repos_status = StatusCode.NONE
        revision: Optional[int] = None
        is_locked = entry.find("lock") is not None
        tree_conflicted = False

        wc = entry.find("wc-status")
        if wc is not None:
            wc_status = status_from_word(wc.get("item"))
            prop_status = status_from_word(wc.get("props"))
            revision = parse_int(wc.get("revision"))
            is_locked = is_locked or wc.find("lock") is not None
            tree_conflicted = wc.get("tree-conflicted") == "true"

        repos = entry.find("repos-status")
        if repos is not None:
            repos_status = status_from_word(repos.get("item"))
            is_locked = is_locked or repos.find("lock") is not None

        last_rev: Optional[int] = None
        last_author: Optional[str] = None
        commit = entry.find("commit")
        if commit is None and wc is not None:
            commit = wc.find("commit")
        if commit is not None:
            last_rev = parse_int(commit.get("revision"))
            last_author = child_text(commit, "author")

        tree_conflict: Optional[str] = None
        tc_node = entry.find("tree-conflict")
        if tc_node is not None:
            tree_conflict = "".join(tc_node.itertext()).strip() or tc_node.get(
                "operation", "tree-conflicted"
            )
        elif tree_conflicted:
            tree_conflict = "tree-conflicted"

        return _build_status(
            path=path,
            kind=self._node_kind(path, entry.get("kind")),
            working_copy_status=wc_status,
            property_status=prop_status,
            repository_status=repos_status,
            revision=revision,
            last_changed_revision=last_rev,
            last_changed_author=last_author,
            is_locked=is_locked,
            conflict_flag=entry.find("conflict") is not None or tree_conflicted,
            tree_conflict=tree_conflict,
        )

    # ---- node kind ----

    def _node_kind(self, path: str, explicit: Optional[str]) -> NodeKind:
        if explicit:
            if explicit.lower() in ("dir", "directory"):
                return NodeKind.DIRECTORY
            if explicit.lower() == "file":
                return NodeKind.FILE
        if path.endswith(("/", "\\")):
            return NodeKind.DIRECTORY
        if self._probe_filesystem:
            return NodeKind.DIRECTORY if os.path.isdir(path) else NodeKind.FILE
        return NodeKind.UNKNOWN


def _strip_markers(path: str) -> str:
    """Drop flag columns (lock, switched, out-of-date...) printed before the path."""
    while len(path) > 1 and path[0] in _PATH_MARKERS and path[1] == " ":
        path = path[2:].lstrip()
    return path


def _parse_revision_field(field: str) -> Optional[int]:
    """Revision column: blank or ``-`` means no revision."""
    value = field.strip()
    if not value or value == "-" or not value.isdigit():
        return None
    return int(value)


def _build_status(
    *,
    path: str,
    kind: NodeKind,
    working_copy_status: StatusCode,
    property_status: StatusCode,
    repository_status: StatusCode = StatusCode.NONE,
    revision: Optional[int] = None,
    last_changed_revision: Optional[int] = None,
    last_changed_author: Optional[str] = None,
    is_locked: bool = False,
    conflict_flag: bool = False,
    tree_conflict: Optional[str] = None,
) -> FileStatus:
    """Single construction point shared by the text and XML paths."""
    has_conflict = (
        conflict_flag
        or working_copy_status == StatusCode.CONFLICTED
        or property_status == StatusCode.CONFLICTED
    )
    return FileStatus(
        path=path,
        node_kind=kind,
        working_copy_status=working_copy_status,
        repository_status=repository_status,
        property_status=property_status,
        revision=revision,
        last_changed_revision=last_changed_revision,
        last_changed_author=last_changed_author,
        is_locked=is_locked,
        has_conflict=has_conflict,
        tree_conflict=tree_conflict,
    )
