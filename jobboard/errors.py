"""Exceptions raised by the job board client."""
from __future__ import annotations


class JobBoardError(Exception):
    """Base exception for job board errors."""
    pass


class ValidationError(JobBoardError):
    """Raised when input is rejected before any I/O happens."""
    pass


class DuplicateEntryError(JobBoardError):
    """Raised when a record that must be unique already exists."""
    pass


class DuplicateApplicationError(DuplicateEntryError):
    """Raised when the user already tracked an application for the job."""

    def __init__(self, job_id: str) -> None:
        super().__init__("You have already marked this job as applied")
        self.job_id = job_id


class StorageError(JobBoardError):
    """Raised when stored data exists but cannot be read back."""
    pass


class AuthenticationError(JobBoardError):
    """Raised when a credential or signed-in session is missing or invalid."""
    pass


class TransportError(JobBoardError):
    """Raised when a request fails at the network level or with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
