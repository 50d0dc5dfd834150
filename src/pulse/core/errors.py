"""Error taxonomy for the response store and session lifecycle.

Every error is recoverable and raised synchronously to the caller; the CLI
turns them into user-facing messages or confirmation prompts.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str


class PulseError(Exception):
    """Base class for all pulse domain errors."""


class InvalidSubmission(PulseError, ValueError):
    def __init__(self, issues: Sequence[ValidationIssue]) -> None:
        self.issues = list(issues)
        formatted = "; ".join(
            f"{issue.path}: {issue.message}" if issue.path else issue.message
            for issue in self.issues
        )
        super().__init__(f"Invalid submission: {formatted}")


class EmptySelection(InvalidSubmission):
    """No expected takeaway was selected."""

    def __init__(self) -> None:
        super().__init__([ValidationIssue(path="hope", message="Select at least one option.")])


class SessionNotFound(PulseError, LookupError):
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class DuplicateSession(PulseError, ValueError):
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session already exists: {session_id}")


class ActiveSessionDeletionForbidden(PulseError):
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Cannot delete the active session: {session_id}")


class ConfirmationRequired(PulseError):
    """The operation needs explicit confirmation; re-invoke with force=True."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PartialWriteError(PulseError, RuntimeError):
    """A multi-region write failed part-way.

    ``rolled_back`` tells whether the stores were restored to their prior
    state. When it is False the dual-write invariant may be broken.
    """

    def __init__(self, operation: str, rolled_back: bool) -> None:
        self.operation = operation
        self.rolled_back = rolled_back
        state = "changes rolled back" if rolled_back else "rollback failed"
        super().__init__(f"Write failed during {operation} ({state}).")


class CorruptRegion(PulseError):
    """A storage region holds data that cannot be decoded.

    Reads and writes against the region are refused so the damaged data is
    never replaced by an empty collection.
    """

    def __init__(self, region: str, detail: str) -> None:
        self.region = region
        self.detail = detail
        super().__init__(f"Stored data in {region} is unreadable ({detail}); it was left untouched.")
