"""Error taxonomy shared by the manager core."""

from __future__ import annotations

from typing import Optional


class ManagerError(RuntimeError):
    """Base class for errors raised by the manager core."""


class ValidationError(ManagerError, ValueError):
    """Raised for malformed or out-of-range input, before any I/O."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class NotConfigured(ManagerError):
    """Raised when a required collaborator was not wired."""


class RemoteFailure(ManagerError):
    """Raised for transport errors or undecodable remote responses."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        user_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.user_message = user_message


class PersistenceFailure(ManagerError):
    """Raised when a local write fails."""
