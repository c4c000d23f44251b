"""URL construction for registry API v2 endpoints."""

from typing import Any

BLOB_PATH = "/v2/{}/blobs/{}"
UPLOAD_PATH = "/v2/{}/blobs/uploads/"
API_ROOT = "/v2/"


def build_url(base_url: str, template: str, *args: Any) -> str:
    """Build an absolute URL from a path template.

    Arguments are inserted verbatim; repository names keep their slashes.

    Args:
        base_url: Registry base URL (e.g., http://localhost:5000)
        template: Path template using ``{}`` placeholders
        *args: Values for the placeholders

    Returns:
        Absolute URL string
    """
    return base_url.rstrip("/") + template.format(*(str(arg) for arg in args))


def blob_url(base_url: str, repository: str, digest: Any) -> str:
    """URL of a blob addressed by digest."""
    return build_url(base_url, BLOB_PATH, repository, digest)


def upload_url(base_url: str, repository: str) -> str:
    """URL of the upload collection of a repository."""
    return build_url(base_url, UPLOAD_PATH, repository)
