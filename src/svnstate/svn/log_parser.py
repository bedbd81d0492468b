"""Parser for ``svn log`` output, plain and ``--xml``.

Plain output looks like::

    ------------------------------------------------------------------------
    r100 | alice | 2024-01-10 12:00:00 +0000 (Wed, 10 Jan 2024) | 1 line
    Changed paths:
       M /trunk/app.py
       A /branches/b1 (from /trunk:r99)

    hello
    ------------------------------------------------------------------------

Entries are returned in the order svn printed them.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from svnstate.svn.codes import path_action_from_char
from svnstate.svn.models import EPOCH, ChangedPath, CommitEntry, CopySource
from svnstate.svn.xmlutil import (
    Document,
    as_root,
    child_text,
    parse_int,
    parse_iso_datetime,
)

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_SEPARATOR_RE = re.compile(r"^-{4,}$")
_CHANGED_PATH_PREFIXES = ("A /", "D /", "M /", "R /")
_COPY_MARKER = " (from "
_TEXT_DATE_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})(?:\s+([+-]\d{4}))?"
)


@dataclass
class _LogRecord:
    """Mutable intermediate shared by the text and XML paths."""

    revision: int
    author: str = ""
    timestamp: datetime = EPOCH
    message_lines: List[str] = field(default_factory=list)
    changed_paths: List[ChangedPath] = field(default_factory=list)

    def freeze(self) -> CommitEntry:
        lines = list(self.message_lines)
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()
        return CommitEntry(
            revision=self.revision,
            author=self.author,
            timestamp=self.timestamp,
            message="\n".join(lines),
            changed_paths=tuple(self.changed_paths),
        )


def parse_text_date(value: str) -> Optional[datetime]:
    """Parse ``2024-01-10 12:34:56 +0000 (Wed, 10 Jan 2024)`` into UTC."""
    m = _TEXT_DATE_RE.match(value.strip())
    if not m:
        return None
    stamp, offset = m.groups()
    try:
        if offset:
            parsed = datetime.strptime(f"{stamp} {offset}", "%Y-%m-%d %H:%M:%S %z")
        else:
            parsed = datetime.strptime(stamp, "%Y-%m-%d %H:%M:%S").replace(
                tzinfo=timezone.utc
            )
    except ValueError:
        return None
    return parsed.astimezone(timezone.utc)


def parse_changed_path_line(line: str) -> Optional[ChangedPath]:
    """Parse ``A /trunk/file.txt (from /trunk/old.txt:r100)``."""
    trimmed = line.strip()
    if len(trimmed) < 3:
        return None

    action = path_action_from_char(trimmed[0])
    path = trimmed[2:]
    copy_source: Optional[CopySource] = None

    idx = path.find(_COPY_MARKER)
    if idx >= 0:
        copy_part = path[idx + len(_COPY_MARKER):]
        path = path[:idx]
        rev_idx = copy_part.rfind(":r")
        if rev_idx >= 0:
            copy_rev = parse_int(copy_part[rev_idx + 2:].rstrip(")"))
            if copy_rev is not None:
                copy_source = CopySource(copy_part[:rev_idx], copy_rev)

    return ChangedPath(path=path, action=action, copy_source=copy_source)


class LogParser:
    """Turn log output into ``CommitEntry`` records."""

    # ---- text ----

    def parse_text(self, output: Optional[str]) -> List[CommitEntry]:
        entries: List[CommitEntry] = []
        if not output or not output.strip():
            return entries

        current: Optional[_LogRecord] = None
        for line in _LINE_SPLIT_RE.split(output):
            trimmed = line.strip()

            if _SEPARATOR_RE.match(trimmed):
                if current is not None:
                    entries.append(current.freeze())
                current = None
                continue

            if current is None:
                if trimmed.startswith("r"):
                    current = self._parse_header(trimmed)
                elif trimmed:
                    logger.debug("skipping log line outside an entry: %r", line)
                continue

            if trimmed.startswith("Changed paths:"):
                continue

            if trimmed.startswith(_CHANGED_PATH_PREFIXES):
                changed = parse_changed_path_line(trimmed)
                if changed is not None:
                    current.changed_paths.append(changed)
                continue

            current.message_lines.append(line.rstrip())

        if current is not None:
            entries.append(current.freeze())
        return entries

    def _parse_header(self, line: str) -> Optional[_LogRecord]:
        parts = [p.strip() for p in line.split("|")]
        if len(parts) < 3 or not parts[0].startswith("r"):
            logger.debug("skipping malformed log header: %r", line)
            return None
        revision = parse_int(parts[0][1:])
        if revision is None:
            logger.debug("skipping log header without a revision: %r", line)
            return None
        return _LogRecord(
            revision=revision,
            author=parts[1],
            timestamp=parse_text_date(parts[2]) or EPOCH,
        )

    # ---- xml ----

    def parse_structured(self, document: Document) -> List[CommitEntry]:
        entries: List[CommitEntry] = []
        root = as_root(document)
        if root is None:
            return entries

        for node in root.iter("logentry"):
            try:
                record = self._parse_logentry(node)
            except (ValueError, AttributeError, TypeError) as exc:
                logger.debug("skipping logentry %r: %s", node.attrib, exc)
                continue
            if record is not None:
                entries.append(record.freeze())
        return entries

    def _parse_logentry(self, node: ET.Element) -> Optional[_LogRecord]:
        revision = parse_int(node.get("revision"))
        if revision is None:
            logger.debug("skipping logentry without a revision: %r", node.attrib)
            return None

        record = _LogRecord(revision=revision)
        record.author = child_text(node, "author") or ""
        record.timestamp = parse_iso_datetime(child_text(node, "date")) or EPOCH
        msg = child_text(node, "msg")
        if msg:
            record.message_lines = msg.splitlines()

        for path_node in node.findall("paths/path"):
            changed = _parse_path_node(path_node)
            if changed is not None:
                record.changed_paths.append(changed)
        return record


def _parse_path_node(node: ET.Element) -> Optional[ChangedPath]:
    action = node.get("action")
    if not action:
        logger.debug("skipping changed path without an action")
        return None

    copy_source: Optional[CopySource] = None
    copy_path = node.get("copyfrom-path")
    copy_rev = parse_int(node.get("copyfrom-rev"))
    if copy_path is not None and copy_rev is not None:
        copy_source = CopySource(copy_path, copy_rev)

    return ChangedPath(
        path=(node.text or "").strip(),
        action=path_action_from_char(action),
        copy_source=copy_source,
    )
