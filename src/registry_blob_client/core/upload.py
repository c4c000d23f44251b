"""Upload session helpers."""

from typing import Any, Mapping, Optional

from yarl import URL

from ..exceptions import UploadLocationError
from .types import OCTET_STREAM, UploadSession


def parse_upload_location(initiate_url: str, location: Optional[str]) -> URL:
    """Parse the Location header of an upload initiation response.

    A relative location is resolved against the initiate URL.

    Raises:
        UploadLocationError: If location is missing or not a valid URL
    """
    if not location:
        raise UploadLocationError(
            f"Registry did not return an upload Location for {initiate_url}",
            location=location,
        )

    try:
        parsed = URL(location)
        if parsed.is_absolute():
            return parsed
        return URL(initiate_url).join(parsed)
    except (ValueError, TypeError) as e:
        raise UploadLocationError(
            f"Invalid upload Location {location!r}: {e}", location=location
        ) from e


def session_from_headers(
    initiate_url: str, headers: Mapping[str, str], token_header: str
) -> UploadSession:
    """Build an upload session from initiation response headers.

    A missing token header yields an empty token.
    """
    token = headers.get(token_header, "")
    location = parse_upload_location(initiate_url, headers.get("Location"))
    return UploadSession(location=location, token=token)


def finalize_url(session: UploadSession, digest: Any) -> URL:
    """Upload location with the digest query parameter set.

    An existing digest parameter is replaced; other parameters are kept.
    """
    return session.location.update_query(digest=str(digest))


def finalize_headers(session: UploadSession) -> dict[str, str]:
    """Request headers for the finalize PUT."""
    return {
        "Content-Type": OCTET_STREAM,
        "Authorization": f"Bearer {session.token}",
    }
