"""
Failure taxonomy for an aggregation run.
"""

from typing import Iterable, Optional


class CommitDigestError(Exception):
    """Base class; ``str(exc)`` is always a message fit for the user."""


class ValidationError(CommitDigestError):
    def __init__(self, missing: Iterable[str] = (), message: Optional[str] = None):
        self.missing = list(missing)
        if message is None:
            message = "Missing required field(s): " + ", ".join(self.missing)
        super().__init__(message)


class AuthError(CommitDigestError):
    def __init__(self, status: int, message: str = "GitLab rejected the access token"):
        self.status = status
        self.message = message
        if str(status) not in message:
            message = f"{message} ({status})"
        super().__init__(message)


class ApiError(CommitDigestError):
    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        # GitLab messages often start with the status already, e.g. "404 Project Not Found"
        prefix = "" if str(status) in message else f"{status} "
        super().__init__(f"GitLab API error: {prefix}{message}")


class TransportError(CommitDigestError):
    pass
