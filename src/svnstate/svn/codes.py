"""Character and word tables shared by the text and XML parsers."""

from __future__ import annotations

from typing import Dict, Optional

from svnstate.svn.models import Depth, PathAction, StatusCode

# Column codes printed by ``svn status`` in text mode.
STATUS_CHARS: Dict[str, StatusCode] = {
    " ": StatusCode.NONE,
    "A": StatusCode.ADDED,
    "C": StatusCode.CONFLICTED,
    "D": StatusCode.DELETED,
    "I": StatusCode.IGNORED,
    "M": StatusCode.MODIFIED,
    "R": StatusCode.REPLACED,
    "X": StatusCode.EXTERNAL,
    "?": StatusCode.UNVERSIONED,
    "!": StatusCode.MISSING,
    "~": StatusCode.OBSTRUCTED,
    "L": StatusCode.INCOMPLETE,
    "G": StatusCode.MERGED,
}

# Words used in ``svn status --xml`` item/props attributes.
STATUS_WORDS: Dict[str, StatusCode] = {code.value: code for code in StatusCode}
STATUS_WORDS["normal"] = StatusCode.NONE

_CHAR_FOR_STATUS: Dict[StatusCode, str] = {v: k for k, v in STATUS_CHARS.items()}

PATH_ACTION_CHARS: Dict[str, PathAction] = {
    "A": PathAction.ADDED,
    "D": PathAction.DELETED,
    "M": PathAction.MODIFIED,
    "R": PathAction.REPLACED,
}

_CHAR_FOR_ACTION: Dict[PathAction, str] = {v: k for k, v in PATH_ACTION_CHARS.items()}

DEPTH_WORDS: Dict[str, Depth] = {d.value: d for d in Depth if d != Depth.UNKNOWN}


def status_from_char(char: str) -> StatusCode:
    """Map a status column character; unknown characters are ``NONE``."""
    return STATUS_CHARS.get(char, StatusCode.NONE)


def status_from_word(word: Optional[str]) -> StatusCode:
    """Map an XML status word (case-insensitive); unknown words are ``NONE``."""
    if not word:
        return StatusCode.NONE
    return STATUS_WORDS.get(word.strip().lower(), StatusCode.NONE)


def status_to_char(code: StatusCode) -> str:
    return _CHAR_FOR_STATUS[code]


def status_to_word(code: StatusCode) -> str:
    return code.value


def parse_status(value: str) -> Optional[StatusCode]:
    """Accept either a status char or a word. Returns None when neither matches."""
    if len(value) == 1 and value in STATUS_CHARS:
        return STATUS_CHARS[value]
    return STATUS_WORDS.get(value.strip().lower())


def path_action_from_char(value: Optional[str]) -> PathAction:
    """Leading character of *value* as an action; anything else is ``MODIFIED``."""
    if not value:
        return PathAction.MODIFIED
    return PATH_ACTION_CHARS.get(value[0], PathAction.MODIFIED)


def path_action_to_char(action: PathAction) -> str:
    return _CHAR_FOR_ACTION[action]


def depth_from_word(word: Optional[str]) -> Depth:
    if not word:
        return Depth.UNKNOWN
    return DEPTH_WORDS.get(word.strip().lower(), Depth.UNKNOWN)
