"""
================================================================================
Keyword Errors
================================================================================

Failure taxonomy for the keyword library.

    KeywordError
    ├── ResolutionError          zero matches where one was required
    │   └── IndexOutOfBoundsError
    ├── GateTimeoutError         readiness gate not reached in time
    ├── PreconditionError        local filesystem check failed
    │   ├── MissingPathError
    │   ├── NotAFileError
    │   └── MissingDirectoryError
    ├── ActionExecutionError     Playwright call failed on a ready element
    └── VerificationError        explicit verification did not hold
                                 (also an AssertionError, so pytest reports
                                 it as a test failure)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional


class KeywordError(Exception):
    """
    Base class for keyword failures.

    Attributes:
        operation: Keyword that failed (e.g. "click")
        target: Identifier of the element involved, if any
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        target: Optional[str] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.target = target


class ResolutionError(KeywordError):
    """Raised when a target matched no element where one was required."""
    pass


class IndexOutOfBoundsError(ResolutionError):
    """Raised when an option/element index is outside the matched range."""

    def __init__(self, index: int, count: int, operation: Optional[str] = None,
                 target: Optional[str] = None):
        super().__init__(
            f"Index {index} is out of bounds. Dropdown has {count} options.",
            operation=operation,
            target=target,
        )
        self.index = index
        self.count = count


class GateTimeoutError(KeywordError):
    """Raised when an element did not reach the required state in time."""

    def __init__(self, message: str, state: Optional[str] = None,
                 timeout_ms: Optional[int] = None, operation: Optional[str] = None,
                 target: Optional[str] = None):
        super().__init__(message, operation=operation, target=target)
        self.state = state
        self.timeout_ms = timeout_ms


class PreconditionError(KeywordError):
    """Raised when a local check fails before any browser interaction."""
    pass


class MissingPathError(PreconditionError):
    """The local path does not exist."""
    pass


class NotAFileError(PreconditionError):
    """The local path exists but is not a regular file."""
    pass


class MissingDirectoryError(PreconditionError):
    """A required directory does not exist."""
    pass


class ActionExecutionError(KeywordError):
    """Raised when the underlying Playwright interaction fails."""
    pass


class VerificationError(KeywordError, AssertionError):
    """Raised when an explicit verification does not hold."""
    pass


__all__ = [
    "KeywordError",
    "ResolutionError",
    "IndexOutOfBoundsError",
    "GateTimeoutError",
    "PreconditionError",
    "MissingPathError",
    "NotAFileError",
    "MissingDirectoryError",
    "ActionExecutionError",
    "VerificationError",
]
