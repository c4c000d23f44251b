"""Caller-owned blob content stream."""

from typing import AsyncIterator

import aiohttp
from multidict import CIMultiDictProxy
from yarl import URL


class BlobStream:
    """Read-once stream over a blob download response.

    The status is exposed as received; it is up to the caller to check it.
    The stream holds a pooled connection until closed, so always use it as an
    async context manager or call :meth:`close`.
    """

    def __init__(self, response: aiohttp.ClientResponse) -> None:
        self._response = response

    @property
    def status(self) -> int:
        return self._response.status

    @property
    def headers(self) -> "CIMultiDictProxy[str]":
        return self._response.headers

    @property
    def url(self) -> URL:
        return self._response.url

    @property
    def closed(self) -> bool:
        return self._response.closed

    async def read(self, n: int = -1) -> bytes:
        """Read up to n bytes, or the rest of the stream when n is -1."""
        return await self._response.content.read(n)

    async def iter_chunked(self, chunk_size: int = 8192) -> AsyncIterator[bytes]:
        """Yield the remaining content in chunks of at most chunk_size bytes."""
        async for chunk in self._response.content.iter_chunked(chunk_size):
            yield chunk

    def close(self) -> None:
        """Release the underlying connection.

        A partially read response is not returned to the pool.
        """
        self._response.release()

    async def __aenter__(self) -> "BlobStream":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<BlobStream {self.status} {self.url}>"
