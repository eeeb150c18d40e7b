"""Custom exception hierarchy for autoconnex."""

from __future__ import annotations


class AutoConnexError(Exception):
    """Base exception for all autoconnex errors."""


class AutoConnexConfigError(AutoConnexError):
    """Invalid or missing configuration."""


class ListingValidationError(AutoConnexError, ValueError):
    """A required listing field is missing or a field value is invalid.

    Raised synchronously, before any storage is touched.  Never retried.
    """

    def __init__(self, message: str, *, issues: list[str] | None = None) -> None:
        self.issues = list(issues) if issues else [message]
        super().__init__(message)


class PersistenceError(AutoConnexError):
    """Storage read/write/remove failure, or unreadable stored data."""

    def __init__(
        self,
        message: str,
        *,
        key: str = "",
        operation: str = "",
    ) -> None:
        self.key = key
        self.operation = operation
        super().__init__(message)


class VehicleLookupError(AutoConnexError):
    """Vehicle lookup failed for a reason other than "not found".

    A missing vehicle is reported as ``None`` by the lookup service; this
    error covers transport-level failures only.
    """

    def __init__(self, message: str, *, registration: str = "", state_code: str = "") -> None:
        self.registration = registration
        self.state_code = state_code
        super().__init__(message)
