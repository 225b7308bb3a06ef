"""Plain-text descriptions of tracked changes for review panels."""

from __future__ import annotations

from dataclasses import dataclass

from ..model import Node
from .changes import AuthorId, ChangeKind, TrackedChange


@dataclass(slots=True, frozen=True)
class ChangeSummary:
    author: AuthorId
    kind: ChangeKind
    start: int
    end: int
    deleted_text: str
    inserted_text: str

    def describe(self) -> str:
        """Return e.g. ``deleted "oo" and added "aa"``."""

        parts: list[str] = []
        deleted, inserted = self.deleted_text.strip(), self.inserted_text.strip()
        if deleted:
            parts.append(f'deleted "{deleted}"')
        if inserted:
            parts.append(f'added "{inserted}"')
        if not parts:
            # Only node boundaries changed, e.g. a paragraph split.
            return "changed structure" if self.kind is ChangeKind.INSERTION else "removed structure"
        return " and ".join(parts)


def describe_change(change: TrackedChange, doc: Node, separator: str = " ") -> ChangeSummary:
    """Summarize ``change`` against ``doc``, the document its positions refer to."""

    return ChangeSummary(
        author=change.author,
        kind=change.kind,
        start=change.start,
        end=change.end,
        deleted_text=change.deleted_text(separator),
        inserted_text=doc.text_between(change.start, change.end, separator),
    )


__all__ = ["ChangeSummary", "describe_change"]
