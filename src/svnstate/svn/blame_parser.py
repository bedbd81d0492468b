"""Parser for ``svn blame`` output, plain and ``--xml``."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import List, Optional

from svnstate.svn.models import BlameLine, BlameResult
from svnstate.svn.xmlutil import (
    Document,
    as_root,
    child_text,
    parse_int,
    parse_iso_datetime,
)

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
# "  1234      alice line content" -- revision is "-" for uncommitted lines
_BLAME_RE = re.compile(r"^\s*(\d+|-)\s+(\S+) ?(.*)$")


class BlameParser:
    """Turn blame output into a ``BlameResult``."""

    def parse_text(self, output: Optional[str], path: str = "") -> BlameResult:
        if not output or not output.strip():
            return BlameResult(path=path)

        raw_lines = _LINE_SPLIT_RE.split(output)
        if raw_lines and raw_lines[-1] == "":
            raw_lines.pop()

        lines: List[BlameLine] = []
        for line_no, raw in enumerate(raw_lines, start=1):
            m = _BLAME_RE.match(raw)
            if not m:
                logger.debug("blame line %d has no revision/author prefix", line_no)
                lines.append(BlameLine(line_no=line_no, content=raw))
                continue
            rev, author, content = m.groups()
            lines.append(
                BlameLine(
                    line_no=line_no,
                    revision=parse_int(rev),
                    author=None if author == "-" else author,
                    content=content,
                )
            )
        return BlameResult(path=path, lines=tuple(lines))

    def parse_structured(self, document: Document, path: str = "") -> BlameResult:
        root = as_root(document)
        if root is None:
            return BlameResult(path=path)

        target = root.find(".//target")
        if not path and target is not None:
            path = target.get("path", "")

        lines: List[BlameLine] = []
        for position, entry in enumerate(root.iter("entry"), start=1):
            line_no = parse_int(entry.get("line-number")) or position
            revision: Optional[int] = None
            author: Optional[str] = None
            when: Optional[datetime] = None
            commit = entry.find("commit")
            if commit is not None:
                revision = parse_int(commit.get("revision"))
                author = child_text(commit, "author")
                when = parse_iso_datetime(child_text(commit, "date"))
            lines.append(
                BlameLine(
                    line_no=line_no,
                    revision=revision,
                    author=author,
                    date=when,
                    is_merged=entry.find("merged") is not None,
                )
            )
        return BlameResult(path=path, lines=tuple(lines))
