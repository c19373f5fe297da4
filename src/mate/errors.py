"""Error taxonomy for mate."""

from typing import Optional


class MateError(Exception):
    """Base class for every error raised by mate."""


class StorageError(MateError):
    """The ledger file could not be opened, read, written or truncated."""


class CorruptionError(MateError):
    """A stored row cannot be decoded."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


class ResumeError(MateError):
    """Resuming the last ticket is not meaningful in the current state."""


class NoHistoryError(ResumeError):
    """The ledger holds no entry yet."""


class NoPreviousTicketError(ResumeError):
    """No ticket precedes the last stop."""


class AlreadyWorkingError(ResumeError):
    """A ticket is already open."""

    def __init__(self, title: str):
        super().__init__(f"Already working on: {title}")
        self.title = title
