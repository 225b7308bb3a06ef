"""Tracked-change bookkeeping over an edited document."""

from .changes import AuthorId, ChangeKind, ChangeSet, TrackedChange
from .errors import ChangeSetInvariantError, ErrorCode
from .mapper import coalesce_changes, map_changes
from .minimizer import minimize_change
from .recorder import MinimizeSide, RecordedUpdate, apply_and_slice, record_range, restores_cleanly
from .summary import ChangeSummary, describe_change
from .tracker import (
    ADD_TO_HISTORY_META,
    REVERTING_META,
    SCROLL_INTO_VIEW_META,
    ChangeTracker,
    Resolution,
    TrackerState,
    accept_change,
    init_tracker,
    list_changes,
    on_edit_applied,
    revert_change,
)

__all__ = [
    "ADD_TO_HISTORY_META",
    "REVERTING_META",
    "SCROLL_INTO_VIEW_META",
    "AuthorId",
    "ChangeKind",
    "ChangeSet",
    "ChangeSetInvariantError",
    "ChangeSummary",
    "ChangeTracker",
    "ErrorCode",
    "MinimizeSide",
    "RecordedUpdate",
    "Resolution",
    "TrackedChange",
    "TrackerState",
    "accept_change",
    "apply_and_slice",
    "coalesce_changes",
    "describe_change",
    "init_tracker",
    "list_changes",
    "map_changes",
    "minimize_change",
    "on_edit_applied",
    "record_range",
    "restores_cleanly",
    "revert_change",
]
