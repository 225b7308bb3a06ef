"""Error types raised by the change tracker."""

from __future__ import annotations

from typing import Any


class ErrorCode:
    """Machine-readable reasons attached to tracker errors and log lines."""

    UNSORTED = "unsorted"
    SAME_AUTHOR_OVERLAP = "same_author_overlap"
    DEGENERATE_CHANGE = "degenerate_change"
    OUT_OF_BOUNDS = "out_of_bounds"
    CHANGE_NOT_FOUND = "change_not_found"
    REVERT_CONFLICT = "revert_conflict"


class ChangeSetInvariantError(AssertionError):
    """Raised when the tracked change set violates its ordering or overlap rules.

    This always indicates a defect in the tracker, never bad input.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: str = ErrorCode.UNSORTED,
        index: int | None = None,
        changes: tuple[Any, ...] = (),
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.index = index
        self.changes = changes

    def details(self) -> dict[str, Any]:
        return {
            "reason": self.reason,
            "index": self.index,
            "changes": [repr(change) for change in self.changes],
        }


__all__ = ["ChangeSetInvariantError", "ErrorCode"]
