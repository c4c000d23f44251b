"""Test helpers: an in-process fake registry and integration test isolation."""

import asyncio
import os
import socket
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from aiohttp import web
from multidict import CIMultiDict


@dataclass
class RecordedRequest:
    """Request as seen by the fake registry."""

    method: str
    path: str
    query: dict[str, str]
    headers: CIMultiDict
    body: bytes = b""


@dataclass
class FakeRegistry:
    """Minimal registry API v2 blob endpoints backed by a dict.

    Attributes:
        blobs: Stored blobs keyed by digest
        requests: Every request received, in order
        upload_location: Location returned on upload initiation; None for the
            default ``/v2/{name}/blobs/upload-{n}``, "" to omit the header
        upload_token: Request-Token header value; None to omit the header
        blob_status: Forced status for blob GET/HEAD requests
        stall: Blob GET/HEAD and /v2/ requests wait until ``release`` is set
        drop_uploads: Upload PUTs close the connection without a response
    """

    blobs: dict[str, bytes] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)
    upload_location: Optional[str] = None
    upload_token: Optional[str] = "tok123"
    blob_status: Optional[int] = None
    stall: bool = False
    drop_uploads: bool = False
    url: str = ""

    def __post_init__(self) -> None:
        self.release = asyncio.Event()
        self._upload_count = 0
        self.app = web.Application()
        self.app.router.add_get("/v2/", self.ping)
        self.app.router.add_post("/v2/{name:.+}/blobs/uploads/", self.initiate_upload)
        self.app.router.add_get("/v2/{name:.+}/blobs/{reference}", self.get_blob)
        self.app.router.add_put("/v2/{name:.+}/blobs/{reference}", self.put_blob)

    def requests_for(self, method: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == method]

    async def _record(self, request: web.Request) -> RecordedRequest:
        body = await request.read() if request.can_read_body else b""
        recorded = RecordedRequest(
            method=request.method,
            path=request.path,
            query=dict(request.query),
            headers=CIMultiDict(request.headers),
            body=body,
        )
        self.requests.append(recorded)
        return recorded

    async def ping(self, request: web.Request) -> web.Response:
        await self._record(request)
        if self.stall:
            await self.release.wait()
        return web.json_response(
            {}, headers={"Docker-Distribution-Api-Version": "registry/2.0"}
        )

    async def get_blob(self, request: web.Request) -> web.Response:
        await self._record(request)
        if self.stall:
            await self.release.wait()
        if self.blob_status is not None:
            return web.Response(status=self.blob_status)

        digest = request.match_info["reference"]
        if digest not in self.blobs:
            return web.json_response(
                {"errors": [{"code": "BLOB_UNKNOWN", "message": "blob unknown"}]},
                status=404,
            )
        return web.Response(
            body=self.blobs[digest],
            content_type="application/octet-stream",
            headers={"Docker-Content-Digest": digest},
        )

    async def initiate_upload(self, request: web.Request) -> web.Response:
        await self._record(request)
        self._upload_count += 1
        name = request.match_info["name"]

        headers = {}
        location = self.upload_location
        if location is None:
            location = f"/v2/{name}/blobs/upload-{self._upload_count}"
        if location:
            headers["Location"] = location
        if self.upload_token is not None:
            headers["Request-Token"] = self.upload_token
        return web.Response(status=202, headers=headers)

    async def put_blob(self, request: web.Request) -> web.Response:
        recorded = await self._record(request)
        if self.drop_uploads:
            request.transport.close()
            return web.Response(status=201)

        digest = request.query.get("digest")
        if not digest:
            return web.json_response(
                {"errors": [{"code": "DIGEST_INVALID"}]}, status=400
            )
        self.blobs[digest] = recorded.body
        return web.Response(status=201, headers={"Docker-Content-Digest": digest})


def unused_port() -> int:
    """Return a local port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def generate_test_id() -> str:
    """Generate unique test identifier."""
    timestamp = int(time.time() * 1000) % 10000  # Last 4 digits of ms timestamp
    uuid_part = str(uuid.uuid4())[:8]
    worker_id = os.getenv("PYTEST_XDIST_WORKER", "main")
    return f"{worker_id}-{timestamp}-{uuid_part}"


def make_repo_name(base_name: str, test_id: str) -> str:
    """Create isolated repository name."""
    return f"test-{test_id}-{base_name}"
