"""Custom exceptions for the registry blob client."""

from typing import Mapping, Optional


class RegistryError(Exception):
    """Base exception for all registry-related errors."""

    pass


class HTTPStatusError(RegistryError):
    """Raised by the transport when a completed request has a non-2xx status.

    Carries the status so callers can classify it without inspecting the
    response object.
    """

    def __init__(
        self,
        status: int,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(f"{method} {url} returned HTTP {status}")
        self.status = status
        self.method = method
        self.url = url
        self.headers = dict(headers or {})


class BlobUploadError(RegistryError):
    """Raised when blob upload fails."""

    pass


class UploadLocationError(BlobUploadError):
    """Raised when the upload session Location header is missing or malformed."""

    def __init__(self, message: str, location: Optional[str] = None) -> None:
        super().__init__(message)
        self.location = location


class ConfigDecodeError(RegistryError):
    """Raised when a config blob cannot be decoded into the requested model."""

    pass
