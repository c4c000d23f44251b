"""Registry API v2 blob transfer client."""

import asyncio
import logging
from typing import Any, AsyncIterator, BinaryIO, Optional, Union

import aiohttp

from ..exceptions import ConfigDecodeError, HTTPStatusError, RegistryError
from ..utils.config import ConfigModel, decode_config
from .session import create_session, send_request
from .stream import BlobStream
from .types import OCTET_STREAM, RegistryConfig, UploadSession
from .upload import finalize_headers, finalize_url, session_from_headers
from .urls import API_ROOT, blob_url, build_url, upload_url

BlobContent = Union[bytes, bytearray, BinaryIO, AsyncIterator[bytes]]


class BlobClient:
    """Async client for blob download, existence check and upload.

    Holds no per-call state, so one client may serve concurrent operations.
    """

    def __init__(
        self,
        registry: Union[str, RegistryConfig],
        session: Optional[aiohttp.ClientSession] = None,
        logger: Optional[logging.Logger] = None,
        connector: Optional[aiohttp.BaseConnector] = None,
    ) -> None:
        """Initialize the blob client.

        Args:
            registry: Registry URL (e.g., http://localhost:5000) or config
            session: Externally owned aiohttp session; not closed by the client
            logger: Sink for operation traces
            connector: aiohttp connector used when the client creates its session
        """
        if isinstance(registry, str):
            registry = RegistryConfig(url=registry)
        self.config = registry
        self.session = session
        self.logger = logger or logging.getLogger(__name__)
        self.connector = connector
        self._owns_session = session is None

    async def __aenter__(self) -> "BlobClient":
        """Enter async context manager."""
        if self.session is None:
            self.session = await create_session(self.config, self.connector)
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the client session if the client created it."""
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
            self.session = None

    def _session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            raise RegistryError(
                "Client session is not open; use 'async with BlobClient(...)'"
            )
        return self.session

    async def check_connectivity(self) -> bool:
        """Check if the registry answers on the v2 API root.

        Returns:
            True on 200, or 401 when the registry requires authentication
        """
        url = build_url(self.config.base_url, API_ROOT)
        self.logger.debug("registry.ping url=%s", url)
        try:
            async with self._session().get(url) as resp:
                return resp.status in (200, 401)
        except (aiohttp.ClientError, asyncio.TimeoutError):
            return False

    async def download_blob(self, repository: str, digest: Any) -> BlobStream:
        """Open a blob for reading.

        The response status is not inspected: a missing blob yields a stream
        whose ``status`` is 404. The caller owns the stream and must close it.

        Args:
            repository: Repository name
            digest: Blob digest

        Returns:
            Open blob stream
        """
        url = blob_url(self.config.base_url, repository, digest)
        self.logger.debug(
            "registry.blob.download url=%s repository=%s digest=%s",
            url,
            repository,
            digest,
        )
        resp = await send_request(self._session(), "GET", url)
        return BlobStream(resp)

    async def get_config(
        self, repository: str, digest: Any, model: ConfigModel = None
    ) -> Any:
        """Download a JSON config blob and decode it into model.

        The body is collected in memory before decoding, up to
        ``config.max_config_size`` bytes.

        Args:
            repository: Repository name
            digest: Config blob digest
            model: None for plain JSON, a dataclass type, or a callable

        Returns:
            Decoded config

        Raises:
            ConfigDecodeError: If the blob is not JSON, does not fit model, or
                exceeds max_config_size
        """
        limit = self.config.max_config_size
        chunks = []
        size = 0
        async with await self.download_blob(repository, digest) as stream:
            async for chunk in stream.iter_chunked(64 * 1024):
                size += len(chunk)
                if size > limit:
                    raise ConfigDecodeError(
                        f"Config blob {digest} exceeds {limit} bytes"
                    )
                chunks.append(chunk)
        return decode_config(b"".join(chunks), model)

    async def check_blob_exists(self, repository: str, digest: Any) -> bool:
        """Check if a blob exists in the registry.

        A 404 is a normal "absent" answer. Error statuses and transport
        failures are raised rather than reported as absence.

        Args:
            repository: Repository name
            digest: Blob digest

        Returns:
            True if the registry answered 200, False on 404 or on any other
            2xx status

        Raises:
            HTTPStatusError: For non-2xx statuses other than 404
            aiohttp.ClientError: On transport failure
        """
        url = blob_url(self.config.base_url, repository, digest)
        self.logger.debug(
            "registry.blob.check url=%s repository=%s digest=%s",
            url,
            repository,
            digest,
        )
        try:
            resp = await send_request(
                self._session(), "HEAD", url, raise_for_status=True
            )
        except HTTPStatusError as e:
            if e.status == 404:
                return False
            raise

        resp.release()
        return resp.status == 200

    async def initiate_upload(self, repository: str) -> UploadSession:
        """Start an upload session.

        Args:
            repository: Repository name

        Returns:
            Upload session with location and token

        Raises:
            UploadLocationError: If the Location header is missing or malformed
        """
        url = upload_url(self.config.base_url, repository)
        self.logger.debug(
            "registry.blob.initiate-upload url=%s repository=%s", url, repository
        )
        resp = await send_request(
            self._session(), "POST", url, headers={"Content-Type": OCTET_STREAM}
        )
        try:
            return session_from_headers(
                url, resp.headers, self.config.upload_token_header
            )
        finally:
            resp.release()

    async def finalize_upload(
        self, session: UploadSession, content: BlobContent, digest: Any
    ) -> str:
        """Send blob content to an upload session in a single PUT.

        The response status is not inspected; the registry is responsible for
        verifying content against digest.

        Args:
            session: Session returned by initiate_upload
            content: Blob content (bytes, binary file or async byte iterator)
            digest: Digest of content

        Returns:
            Digest string
        """
        url = finalize_url(session, digest)
        self.logger.debug("registry.blob.upload url=%s digest=%s", url, digest)
        resp = await send_request(
            self._session(),
            "PUT",
            url,
            data=content,
            headers=finalize_headers(session),
        )
        resp.release()
        return str(digest)

    async def upload_blob(
        self, repository: str, content: BlobContent, digest: Any
    ) -> str:
        """Upload a blob using a monolithic upload.

        Args:
            repository: Repository name
            content: Blob content (bytes, binary file or async byte iterator)
            digest: Digest of content

        Returns:
            Digest string

        Raises:
            UploadLocationError: If the upload session could not be opened
        """
        session = await self.initiate_upload(repository)
        return await self.finalize_upload(session, content, digest)
