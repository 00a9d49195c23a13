from __future__ import annotations


class InsortError(Exception):
    """Base class for errors raised by insort itself."""


class NotFoundError(InsortError):
    """The target file is absent and may not be created."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class UndecodableError(InsortError):
    """The target file's bytes could not be decoded as text."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
