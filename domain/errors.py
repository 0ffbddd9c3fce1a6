"""
Domain error taxonomy for the botaguas inventory.

Repositories raise these; the API layer maps them to HTTP responses.
"""

from __future__ import annotations


class StoreUnavailable(RuntimeError):
    """Raised when a call to the remote store fails (network, auth expiry, server error)."""
    pass


class DuplicateKey(ValueError):
    """Raised when a new record would reuse an existing mold number."""

    def __init__(self, mold_number: str) -> None:
        super().__init__(
            f"Mold number {mold_number} already exists. Please enter a different mold number."
        )
        self.mold_number = mold_number


class ValidationFailed(ValueError):
    """Raised at the caller boundary when a required field is missing or out of range."""
    pass


__all__ = ["StoreUnavailable", "DuplicateKey", "ValidationFailed"]
