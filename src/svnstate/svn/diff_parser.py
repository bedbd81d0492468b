"""Unified diff parser for ``svn diff`` output.

Classification order matters:

1. a line starting with a binary marker short-circuits to a binary result;
2. header lines (``Index:``, ``diff``, ``---``, ``+++``, ``====`` rulers);
3. hunk headers (``@@ -a,b +c,d @@``), keeping only the start offsets;
4. everything else by its first character, defaulting to context.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from svnstate.svn.models import DiffLine, DiffLineKind, DiffResult

_HUNK_HEADER_RE = re.compile(r"^@@\s+-(\d+)(?:,(\d+))?\s+\+(\d+)(?:,(\d+))?\s+@@")
_HEADER_RE = re.compile(r"^(?:Index:|diff\s|---\s|\+\+\+\s|={3,}$)")
_BINARY_RE = re.compile(
    r"^(?:Binary files? |Cannot display: file marked as a binary type)", re.MULTILINE
)
_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_INDEX_SPLIT_RE = re.compile(r"(?:\r\n|\r|\n)(?=Index: )")
_PLUS_HEADER_RE = re.compile(r"^\+\+\+\s+(?:b/)?(.*?)(?:\t.*)?$")


def _is_binary(text: str) -> bool:
    return _BINARY_RE.search(text) is not None


def _header_path(line: str) -> Optional[str]:
    """File path named by an ``Index:`` or ``+++`` header, if any."""
    if line.startswith("Index:"):
        return line[len("Index:"):].strip() or None
    m = _PLUS_HEADER_RE.match(line)
    if m:
        # strip svn's "(revision N)" / "(working copy)" suffix
        path = re.sub(r"\s+\([^)]*\)$", "", m.group(1)).strip()
        return path or None
    return None


class DiffParser:
    """Classify diff text into ``DiffLine`` records.

    Usage::

        result = DiffParser().parse(diff_text)
        if result.is_binary:
            ...
        for line in result.lines:
            ...
    """

    def parse(self, output: Optional[str]) -> DiffResult:
        if not output or not output.strip():
            return DiffResult()
        if _is_binary(output):
            return DiffResult.binary(output.strip())
        lines, path = self._classify(_LINE_SPLIT_RE.split(output))
        return DiffResult(lines=tuple(lines), path=path)

    def parse_multiple(self, output: Optional[str]) -> List[DiffResult]:
        """Split a combined diff at each ``Index:`` line; one result per file."""
        results: List[DiffResult] = []
        if not output or not output.strip():
            return results

        for section in _INDEX_SPLIT_RE.split(output):
            if not section.strip():
                continue
            raw_lines = _LINE_SPLIT_RE.split(section)
            if _is_binary(section):
                path = next(
                    (p for p in map(_header_path, raw_lines) if p is not None), ""
                )
                binary_line = next(
                    (ln.strip() for ln in raw_lines if _is_binary(ln)), section.strip()
                )
                results.append(DiffResult.binary(binary_line, path=path))
                continue
            lines, path = self._classify(raw_lines)
            results.append(DiffResult(lines=tuple(lines), path=path))
        return results

    def _classify(self, raw_lines: List[str]) -> Tuple[List[DiffLine], str]:
        lines: List[DiffLine] = []
        path = ""
        orig_no: Optional[int] = None
        mod_no: Optional[int] = None

        for raw in raw_lines:
            if not raw:
                continue

            if _HEADER_RE.match(raw):
                lines.append(DiffLine(DiffLineKind.HEADER, raw))
                if not path:
                    path = _header_path(raw) or ""
                orig_no = mod_no = None
                continue

            hm = _HUNK_HEADER_RE.match(raw)
            if hm:
                orig_no = int(hm.group(1))
                mod_no = int(hm.group(3))
                lines.append(DiffLine(DiffLineKind.HUNK_HEADER, raw, orig_no, mod_no))
                continue

            first = raw[0]
            if first == "+":
                lines.append(DiffLine(DiffLineKind.ADDITION, raw, None, mod_no))
                if mod_no is not None:
                    mod_no += 1
            elif first == "-":
                lines.append(DiffLine(DiffLineKind.DELETION, raw, orig_no, None))
                if orig_no is not None:
                    orig_no += 1
            elif first == "\\":
                # "\ No newline at end of file"
                lines.append(DiffLine(DiffLineKind.CONTEXT, raw))
            else:
                lines.append(DiffLine(DiffLineKind.CONTEXT, raw, orig_no, mod_no))
                if orig_no is not None:
                    orig_no += 1
                if mod_no is not None:
                    mod_no += 1

        return lines, path


def build_naive_diff(
    original: str,
    modified: str,
    original_path: str = "",
    modified_path: str = "",
) -> DiffResult:
    """Position-aligned line comparison of two texts (not an LCS diff).

    A line that differs at the same index becomes a deletion followed by an
    addition, so an inserted line shifts everything after it.
    """
    old_lines = original.splitlines()
    new_lines = modified.splitlines()
    lines: List[DiffLine] = []

    for i in range(max(len(old_lines), len(new_lines))):
        line_no = i + 1
        has_old = i < len(old_lines)
        has_new = i < len(new_lines)

        if has_new and not has_old:
            lines.append(DiffLine(DiffLineKind.ADDITION, "+" + new_lines[i], None, line_no))
        elif has_old and not has_new:
            lines.append(DiffLine(DiffLineKind.DELETION, "-" + old_lines[i], line_no, None))
        elif old_lines[i] != new_lines[i]:
            lines.append(DiffLine(DiffLineKind.DELETION, "-" + old_lines[i], line_no, None))
            lines.append(DiffLine(DiffLineKind.ADDITION, "+" + new_lines[i], None, line_no))
        else:
            lines.append(DiffLine(DiffLineKind.CONTEXT, " " + old_lines[i], line_no, line_no))

    return DiffResult(
        lines=tuple(lines),
        path=modified_path or original_path,
        original_path=original_path,
        modified_path=modified_path,
    )
