"""HTTP transport built on aiohttp."""

from typing import Any, Optional

import aiohttp

from ..exceptions import HTTPStatusError
from .types import RegistryConfig


async def create_session(
    config: Optional[RegistryConfig] = None,
    connector: Optional[aiohttp.BaseConnector] = None,
) -> aiohttp.ClientSession:
    """Create an aiohttp session for registry requests.

    Args:
        config: Registry configuration supplying timeout and default headers
        connector: aiohttp connector for connection pooling

    Returns:
        New client session, owned by the caller
    """
    if config is None:
        return aiohttp.ClientSession(connector=connector)

    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=config.timeout),
        headers=config.headers,
    )


def is_success(status: int) -> bool:
    """Check if status is 2xx."""
    return 200 <= status < 300


async def send_request(
    session: aiohttp.ClientSession,
    method: str,
    url: Any,
    *,
    raise_for_status: bool = False,
    **kwargs: Any,
) -> aiohttp.ClientResponse:
    """Issue a request and return the open response.

    Transport failures propagate unchanged. With ``raise_for_status`` a
    non-2xx response is released and reported as :class:`HTTPStatusError`.

    Args:
        session: aiohttp session
        method: HTTP method
        url: Absolute request URL (str or yarl.URL)
        raise_for_status: Raise HTTPStatusError for non-2xx statuses
        **kwargs: Passed through to ``ClientSession.request``

    Returns:
        Open response; the caller must release it

    Raises:
        HTTPStatusError: If raise_for_status is set and status is not 2xx
    """
    resp = await session.request(method, url, **kwargs)
    if raise_for_status and not is_success(resp.status):
        resp.release()
        raise HTTPStatusError(resp.status, method, str(resp.url), resp.headers)
    return resp
