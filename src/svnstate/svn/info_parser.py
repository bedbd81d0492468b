"""Parser for ``svn info`` output, plain and ``--xml``.

Every field is parsed on its own: a value that does not parse leaves that
field at its default and the rest of the record intact.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from svnstate.svn.codes import depth_from_word
from svnstate.svn.log_parser import parse_text_date
from svnstate.svn.models import ConflictInfo, ItemInfo, LockInfo
from svnstate.svn.xmlutil import (
    Document,
    as_root,
    child_text,
    parse_int,
    parse_iso_datetime,
)

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_LOCK_COMMENT_RE = re.compile(r"^Lock Comment \((\d+) lines?\)$")


def parse_info_date(value: Optional[str]) -> Optional[datetime]:
    """Text date (``2024-01-10 12:34:56 +0000 (...)``) or ISO-8601."""
    if not value:
        return None
    cleaned = value.split("(")[0].strip()
    return parse_text_date(cleaned) or parse_iso_datetime(cleaned)


def _text(value: str) -> str:
    return value


# text key -> (field name, converter); converters return None on failure
_TEXT_FIELDS: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "Path": ("path", _text),
    "Working Copy Root Path": ("working_copy_root", _text),
    "URL": ("url", _text),
    "Relative URL": ("relative_url", _text),
    "Repository Root": ("repository_root_url", _text),
    "Repository UUID": ("repository_uuid", _text),
    "Revision": ("revision", parse_int),
    "Node Kind": ("node_kind", _text),
    "Schedule": ("schedule", _text),
    "Last Changed Author": ("last_changed_author", _text),
    "Last Changed Rev": ("last_changed_revision", parse_int),
    "Last Changed Date": ("last_changed_date", parse_info_date),
    "Depth": ("depth", depth_from_word),
    "Copied From URL": ("copy_from_url", _text),
    "Copied From Rev": ("copy_from_revision", parse_int),
    "Tree conflict": ("tree_conflict", _text),
}

_LOCK_KEYS = {"Lock Owner": "owner", "Lock Token": "token", "Lock Created": "created"}

_CONFLICT_KEYS = {
    "Conflict Previous Base File": "old_file",
    "Conflict Previous Working File": "working_file",
    "Conflict Current Base File": "new_file",
}


class InfoParser:
    """Turn info output into an ``ItemInfo`` record."""

    # ---- text ----

    def parse_text(self, output: Optional[str]) -> ItemInfo:
        if not output or not output.strip():
            return ItemInfo()

        fields: Dict[str, Any] = {}
        lock: Dict[str, Any] = {}
        conflict: Dict[str, str] = {}
        lines = _LINE_SPLIT_RE.split(output)

        idx = 0
        while idx < len(lines):
            line = lines[idx]
            idx += 1
            if not line.strip():
                continue
            key, sep, value = line.partition(":")
            if not sep:
                continue
            key, value = key.strip(), value.strip()

            comment = _LOCK_COMMENT_RE.match(key)
            if comment:
                count = int(comment.group(1))
                lock["comment"] = "\n".join(lines[idx:idx + count])
                idx += count
            elif key in _TEXT_FIELDS:
                name, convert = _TEXT_FIELDS[key]
                _set_field(fields, name, convert, value)
            elif key in _LOCK_KEYS:
                name = _LOCK_KEYS[key]
                convert = parse_info_date if name == "created" else _text
                _set_field(lock, name, convert, value)
            elif key in _CONFLICT_KEYS:
                conflict[_CONFLICT_KEYS[key]] = value

        if lock:
            fields["lock"] = LockInfo(**lock)
        if conflict:
            fields["conflict"] = ConflictInfo(**conflict)
        return ItemInfo(**fields)

    # ---- xml ----

    def parse_structured(self, document: Document) -> ItemInfo:
        """Info for the first ``entry`` in the document."""
        root = as_root(document)
        if root is None:
            return ItemInfo()
        entry = root if root.tag == "entry" else root.find(".//entry")
        if entry is None:
            return ItemInfo()
        return self._parse_entry(entry)

    def parse_structured_all(self, document: Document) -> List[ItemInfo]:
        """One record per ``entry``, for info over several targets."""
        root = as_root(document)
        if root is None:
            return []
        return [self._parse_entry(entry) for entry in root.iter("entry")]

    def _parse_entry(self, entry: ET.Element) -> ItemInfo:
        fields: Dict[str, Any] = {}

        _set_field(fields, "path", _text, entry.get("path"))
        _set_field(fields, "revision", parse_int, entry.get("revision"))
        _set_field(fields, "node_kind", _text, entry.get("kind"))
        _set_field(fields, "url", _text, child_text(entry, "url"))
        _set_field(fields, "relative_url", _text, child_text(entry, "relative-url"))
        _set_field(fields, "repository_root_url", _text, child_text(entry, "repository/root"))
        _set_field(fields, "repository_uuid", _text, child_text(entry, "repository/uuid"))

        wc_info = entry.find("wc-info")
        if wc_info is not None:
            _set_field(fields, "working_copy_root", _text, child_text(wc_info, "wcroot-abspath"))
            _set_field(fields, "schedule", _text, child_text(wc_info, "schedule"))
            _set_field(fields, "depth", depth_from_word, child_text(wc_info, "depth"))
            _set_field(fields, "copy_from_url", _text, child_text(wc_info, "copy-from-url"))
            _set_field(fields, "copy_from_revision", parse_int, child_text(wc_info, "copy-from-rev"))

        commit = entry.find("commit")
        if commit is not None:
            _set_field(fields, "last_changed_revision", parse_int, commit.get("revision"))
            _set_field(fields, "last_changed_author", _text, child_text(commit, "author"))
            _set_field(fields, "last_changed_date", parse_iso_datetime, child_text(commit, "date"))

        conflict = entry.find("conflict")
        if conflict is None and wc_info is not None:
            conflict = wc_info.find("conflict")
        if conflict is not None:
            fields["conflict"] = ConflictInfo(
                old_file=_first_text(conflict, "prev-base-file", "prev-file"),
                working_file=_first_text(conflict, "prev-wc-file", "working-file"),
                new_file=_first_text(conflict, "cur-base-file", "next-file"),
            )

        tree_conflict = entry.find("tree-conflict")
        if tree_conflict is not None:
            fields["tree_conflict"] = (
                "".join(tree_conflict.itertext()).strip()
                or tree_conflict.get("operation", "tree-conflicted")
            )

        lock = entry.find("lock")
        if lock is not None:
            fields["lock"] = LockInfo(
                owner=child_text(lock, "owner"),
                token=child_text(lock, "token"),
                comment=child_text(lock, "comment"),
                created=parse_iso_datetime(child_text(lock, "created")),
            )

        return ItemInfo(**fields)


def _first_text(node: ET.Element, *tags: str) -> Optional[str]:
    for tag in tags:
        value = child_text(node, tag)
        if value is not None:
            return value
    return None


def _set_field(
    target: Dict[str, Any],
    name: str,
    convert: Callable[[str], Any],
    raw: Optional[str],
) -> None:
    """Store ``convert(raw)`` under *name* unless it is missing or fails."""
    if raw is None:
        return
    try:
        value = convert(raw)
    except (ValueError, TypeError) as exc:
        logger.debug("ignoring info field %s=%r: %s", name, raw, exc)
        return
    if value is None:
        logger.debug("ignoring unparsable info field %s=%r", name, raw)
        return
    target[name] = value
