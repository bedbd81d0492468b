"""Parser for ``svn list`` output, plain, ``--verbose`` and ``--xml``."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from datetime import date, datetime
from typing import List, Optional

from svnstate.svn.models import NodeKind, RepositoryEntry
from svnstate.svn.xmlutil import (
    Document,
    as_root,
    child_text,
    parse_int,
    parse_iso_datetime,
)

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"[\r\n]+")

# 12345 alice      O      4096 Jan 10 12:34 name
_VERBOSE_RE = re.compile(
    r"^(?P<rev>\d+)\s+(?P<author>\S+)\s+"
    r"(?:(?P<lock>O)\s+)?"
    r"(?:(?P<size>\d+)\s+)?"
    r"(?P<month>[A-Za-z]{3})\s+(?P<day>\d{1,2})\s+(?P<tail>\d{1,2}:\d{2}|\d{4})"
    r"\s+(?P<name>.+)$"
)

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}


def _kind_for_name(name: str) -> NodeKind:
    return NodeKind.DIRECTORY if name.endswith(("/", "\\")) else NodeKind.FILE


class ListParser:
    """Turn listing output into ``RepositoryEntry`` records.

    *today* fixes the year used for verbose dates that only carry a time
    (svn prints ``Jan 10 12:34`` for recent items).
    """

    def __init__(self, *, today: Optional[date] = None) -> None:
        self._today = today

    # ---- text ----

    def parse_text(self, output: Optional[str]) -> List[RepositoryEntry]:
        items: List[RepositoryEntry] = []
        if not output or not output.strip():
            return items

        for line in _LINE_SPLIT_RE.split(output):
            trimmed = line.strip()
            if not trimmed:
                continue
            item: Optional[RepositoryEntry] = None
            if trimmed[0].isdigit():
                item = self._parse_verbose(trimmed)
            if item is None:
                # bare names may also start with a digit
                item = RepositoryEntry(name=trimmed, kind=_kind_for_name(trimmed))
            items.append(item)
        return items

    def _parse_verbose(self, line: str) -> Optional[RepositoryEntry]:
        m = _VERBOSE_RE.match(line)
        if not m:
            logger.debug("not a verbose list line: %r", line)
            return None
        name = m.group("name").strip()
        return RepositoryEntry(
            name=name,
            kind=_kind_for_name(name),
            revision=int(m.group("rev")),
            author=m.group("author"),
            date=self.parse_list_date(m.group("month"), m.group("day"), m.group("tail")),
            size=parse_int(m.group("size")),
            is_locked=m.group("lock") is not None,
        )

    def parse_list_date(self, month: str, day: str, tail: str) -> Optional[datetime]:
        """``Jan 10 12:34`` is this year at that time; ``Jan 10 2023`` is midnight."""
        month_no = MONTHS.get(month.lower(), 1)
        try:
            day_no = int(day)
            if ":" in tail:
                hour, minute = (int(p) for p in tail.split(":", 1))
                year = (self._today or date.today()).year
                return datetime(year, month_no, day_no, hour, minute)
            return datetime(int(tail), month_no, day_no)
        except ValueError as exc:
            logger.debug("unparsable list date %s %s %s: %s", month, day, tail, exc)
            return None

    # ---- xml ----

    def parse_structured(self, document: Document) -> List[RepositoryEntry]:
        items: List[RepositoryEntry] = []
        root = as_root(document)
        if root is None:
            return items

        for entry in root.iter("entry"):
            try:
                item = self._parse_entry(entry)
            except (ValueError, AttributeError, TypeError) as exc:
                logger.debug("skipping list entry %r: %s", entry.attrib, exc)
                continue
            if item is not None:
                items.append(item)
        return items

    def _parse_entry(self, entry: ET.Element) -> Optional[RepositoryEntry]:
        name = child_text(entry, "name")
        if name is None:
            logger.debug("skipping list entry without a name")
            return None

        revision: Optional[int] = None
        author: Optional[str] = None
        when: Optional[datetime] = None
        commit = entry.find("commit")
        if commit is not None:
            revision = parse_int(commit.get("revision"))
            author = child_text(commit, "author")
            when = parse_iso_datetime(child_text(commit, "date"))

        return RepositoryEntry(
            name=name,
            kind=NodeKind.DIRECTORY if entry.get("kind") == "dir" else NodeKind.FILE,
            revision=revision,
            author=author,
            date=when,
            size=parse_int(child_text(entry, "size")),
            is_locked=entry.find("lock") is not None,
        )
