"""Registry Blob Client - Async Python client for registry API v2 blob transfer."""

__version__ = "0.1.0"

from .core.blob_client import BlobClient
from .core.stream import BlobStream
from .core.types import RegistryConfig, UploadSession
from .exceptions import (
    BlobUploadError,
    ConfigDecodeError,
    HTTPStatusError,
    RegistryError,
    UploadLocationError,
)
from .models import ImageConfig
from .registry import (
    blob_exists,
    check_registry_connectivity,
    get_blob_config,
    push_blob,
    push_blob_file,
)
from .utils.digest import calculate_digest, calculate_file_digest

__all__ = [
    "BlobClient",
    "BlobStream",
    "RegistryConfig",
    "UploadSession",
    "ImageConfig",
    "RegistryError",
    "HTTPStatusError",
    "BlobUploadError",
    "UploadLocationError",
    "ConfigDecodeError",
    "blob_exists",
    "check_registry_connectivity",
    "get_blob_config",
    "push_blob",
    "push_blob_file",
    "calculate_digest",
    "calculate_file_digest",
]
