"""Working-copy tree reconstruction and action legality."""

from svnstate.workingcopy.filters import StatusFilter, filter_statuses
from svnstate.workingcopy.state_machine import (
    FileAction,
    can_commit,
    can_delete,
    can_revert,
    describe_action,
    has_local_modifications,
    is_valid_transition,
    next_state,
    recommended_action,
    valid_actions,
)
from svnstate.workingcopy.summary import ChangeSummary, summarise
from svnstate.workingcopy.tree import build_status_tree, iter_tree

__all__ = [
    "ChangeSummary",
    "FileAction",
    "StatusFilter",
    "build_status_tree",
    "can_commit",
    "can_delete",
    "can_revert",
    "describe_action",
    "filter_statuses",
    "has_local_modifications",
    "is_valid_transition",
    "iter_tree",
    "next_state",
    "recommended_action",
    "summarise",
    "valid_actions",
]
