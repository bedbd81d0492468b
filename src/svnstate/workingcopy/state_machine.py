"""State machine for working-copy file status transitions.

The transition table answers "what status results from this action"; an
action missing from a status's row is illegal in that status. The
``can_*`` predicates and ``recommended_action`` are UI policy on top of the
table and are not derived from it: a conflicted file has outgoing
transitions but still cannot be committed.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from svnstate.svn.models import StatusCode


class FileAction(str, Enum):
    ADD = "add"
    DELETE = "delete"
    REVERT = "revert"
    COMMIT = "commit"
    UPDATE = "update"
    MODIFY = "modify"
    REPLACE = "replace"
    RESOLVE = "resolve"
    MARK_RESOLVED = "mark_resolved"
    IGNORE = "ignore"
    UNIGNORE = "unignore"


_S = StatusCode
_A = FileAction

_TRANSITIONS: Mapping[StatusCode, Mapping[FileAction, StatusCode]] = MappingProxyType({
    _S.NORMAL: MappingProxyType({
        _A.MODIFY: _S.MODIFIED,
        _A.DELETE: _S.DELETED,
        _A.REPLACE: _S.REPLACED,
    }),
    _S.MODIFIED: MappingProxyType({
        _A.COMMIT: _S.NORMAL,
        _A.REVERT: _S.NORMAL,
        _A.DELETE: _S.DELETED,
        _A.UPDATE: _S.CONFLICTED,  # worst case: incoming change overlaps
    }),
    _S.ADDED: MappingProxyType({
        _A.COMMIT: _S.NORMAL,
        _A.REVERT: _S.UNVERSIONED,
        _A.DELETE: _S.UNVERSIONED,
        _A.MODIFY: _S.ADDED,
    }),
    _S.DELETED: MappingProxyType({
        _A.COMMIT: _S.NORMAL,
        _A.REVERT: _S.NORMAL,
        _A.MODIFY: _S.DELETED,
    }),
    _S.REPLACED: MappingProxyType({
        _A.COMMIT: _S.NORMAL,
        _A.REVERT: _S.NORMAL,
    }),
    _S.CONFLICTED: MappingProxyType({
        _A.RESOLVE: _S.MODIFIED,
        _A.MARK_RESOLVED: _S.MODIFIED,
        _A.REVERT: _S.NORMAL,
        _A.DELETE: _S.DELETED,
    }),
    _S.UNVERSIONED: MappingProxyType({
        _A.ADD: _S.ADDED,
        _A.IGNORE: _S.IGNORED,
    }),
    _S.IGNORED: MappingProxyType({
        _A.UNIGNORE: _S.UNVERSIONED,
    }),
    _S.MISSING: MappingProxyType({
        _A.REVERT: _S.NORMAL,
        _A.DELETE: _S.DELETED,
        _A.UPDATE: _S.NORMAL,
    }),
    _S.OBSTRUCTED: MappingProxyType({
        _A.REVERT: _S.NORMAL,
    }),
    _S.INCOMPLETE: MappingProxyType({
        _A.UPDATE: _S.NORMAL,
    }),
})

_EMPTY: Mapping[FileAction, StatusCode] = MappingProxyType({})

_RECOMMENDED: Mapping[StatusCode, FileAction] = MappingProxyType({
    _S.UNVERSIONED: _A.ADD,
    _S.MODIFIED: _A.COMMIT,
    _S.ADDED: _A.COMMIT,
    _S.DELETED: _A.COMMIT,
    _S.REPLACED: _A.COMMIT,
    _S.CONFLICTED: _A.RESOLVE,
    _S.MISSING: _A.REVERT,
    _S.OBSTRUCTED: _A.REVERT,
    _S.INCOMPLETE: _A.UPDATE,
})

_DELETABLE: FrozenSet[StatusCode] = frozenset({
    _S.NORMAL, _S.MODIFIED, _S.ADDED, _S.REPLACED, _S.CONFLICTED,
    _S.UNVERSIONED, _S.MISSING, _S.IGNORED, _S.OBSTRUCTED,
})

_REVERTABLE: FrozenSet[StatusCode] = frozenset({
    _S.MODIFIED, _S.ADDED, _S.DELETED, _S.REPLACED, _S.CONFLICTED,
    _S.MISSING, _S.OBSTRUCTED,
})

# conflicted files must be resolved first
_COMMITTABLE: FrozenSet[StatusCode] = frozenset({
    _S.MODIFIED, _S.ADDED, _S.DELETED, _S.REPLACED,
})

_LOCALLY_MODIFIED: FrozenSet[StatusCode] = frozenset({
    _S.MODIFIED, _S.ADDED, _S.DELETED, _S.REPLACED, _S.CONFLICTED,
    _S.MISSING, _S.OBSTRUCTED,
})

_DESCRIPTIONS: Mapping[tuple[StatusCode, FileAction], str] = MappingProxyType({
    (_S.UNVERSIONED, _A.ADD): "Schedule file for addition to version control",
    (_S.MODIFIED, _A.COMMIT): "Commit modifications to repository",
    (_S.MODIFIED, _A.REVERT): "Discard local modifications",
    (_S.MODIFIED, _A.DELETE): "Schedule file for deletion",
    (_S.ADDED, _A.COMMIT): "Commit new file to repository",
    (_S.ADDED, _A.REVERT): "Cancel addition (file will become unversioned)",
    (_S.DELETED, _A.COMMIT): "Commit file deletion to repository",
    (_S.DELETED, _A.REVERT): "Restore deleted file",
    (_S.CONFLICTED, _A.RESOLVE): "Mark conflict as resolved",
    (_S.CONFLICTED, _A.REVERT): "Discard changes and restore original",
    (_S.MISSING, _A.REVERT): "Restore missing file from repository",
    (_S.MISSING, _A.DELETE): "Confirm deletion of missing file",
    (_S.NORMAL, _A.DELETE): "Schedule file for deletion",
})


def next_state(current: StatusCode, action: FileAction) -> Optional[StatusCode]:
    """Status after *action*, or None if the action is illegal in *current*."""
    return _TRANSITIONS.get(current, _EMPTY).get(action)


def is_valid_transition(current: StatusCode, action: FileAction) -> bool:
    return next_state(current, action) is not None


def valid_actions(current: StatusCode) -> FrozenSet[FileAction]:
    return frozenset(_TRANSITIONS.get(current, _EMPTY))


def recommended_action(status: StatusCode) -> Optional[FileAction]:
    return _RECOMMENDED.get(status)


def can_delete(status: StatusCode) -> bool:
    return status in _DELETABLE


def can_revert(status: StatusCode) -> bool:
    return status in _REVERTABLE


def can_commit(status: StatusCode) -> bool:
    return status in _COMMITTABLE


def has_local_modifications(status: StatusCode) -> bool:
    return status in _LOCALLY_MODIFIED


def describe_action(action: FileAction, current: StatusCode) -> str:
    """Human-readable summary of performing *action* on a file in *current*."""
    text = _DESCRIPTIONS.get((current, action))
    if text is not None:
        return text
    label = "normal" if current == StatusCode.NONE else current.value
    return f"Perform {action.value} on {label}"
