"""Track attributed insertions and deletions over a structured document."""

from .model import Node, Slice, doc, doc_from_text, paragraph
from .settings import SettingsStore, TrackerSettings
from .tracking import (
    ChangeTracker,
    TrackedChange,
    TrackerState,
    accept_change,
    init_tracker,
    list_changes,
    on_edit_applied,
    revert_change,
)
from .transform import Transform

__all__ = [
    "ChangeTracker",
    "Node",
    "SettingsStore",
    "Slice",
    "TrackedChange",
    "TrackerSettings",
    "TrackerState",
    "Transform",
    "accept_change",
    "doc",
    "doc_from_text",
    "init_tracker",
    "list_changes",
    "on_edit_applied",
    "paragraph",
    "revert_change",
]
