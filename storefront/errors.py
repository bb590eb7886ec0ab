"""Error types raised by the storefront core."""

from __future__ import annotations


class StorefrontError(Exception):
    """Base class for recoverable storefront failures."""


class FetchError(StorefrontError):
    """The backend answered with a non-success status or a malformed payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(StorefrontError):
    """The request never got an HTTP answer."""


class SubmissionInProgressError(StorefrontError):
    """An order submission was started while another one is still in flight."""
