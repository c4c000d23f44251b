"""Core data types for the registry blob client."""

from dataclasses import dataclass, field

from yarl import URL

DEFAULT_UPLOAD_TOKEN_HEADER = "Request-Token"
DEFAULT_MAX_CONFIG_SIZE = 4 * 1024 * 1024
OCTET_STREAM = "application/octet-stream"


@dataclass(frozen=True)
class RegistryConfig:
    """Registry connection settings.

    Attributes:
        url: Registry URL (e.g., http://localhost:5000)
        timeout: Total request timeout in seconds
        upload_token_header: Response header carrying the upload session token
        max_config_size: Largest config blob get_config will decode, in bytes
        headers: Headers added to every request (e.g., credentials)
    """

    url: str
    timeout: float = 30
    upload_token_header: str = DEFAULT_UPLOAD_TOKEN_HEADER
    max_config_size: int = DEFAULT_MAX_CONFIG_SIZE
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/")


@dataclass(frozen=True)
class UploadSession:
    """Server-side upload session as seen by the client."""

    location: URL
    token: str = ""
