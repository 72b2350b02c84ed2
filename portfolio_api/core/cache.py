"""Response caching headers.

Each route declares a ``CacheConfig`` through the ``cache_policy`` dependency.
For GET requests the dependency sets ``Cache-Control`` and ``Last-Modified``;
when the policy enables ETags, ``etag_middleware`` hashes the final 200 body
and answers ``304 Not Modified`` on a matching ``If-None-Match``.

Usage:
    @router.get("/skills", dependencies=[Depends(cache_policy(CacheConfig.LONG))])
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from email.utils import formatdate
from typing import Callable, ClassVar

from fastapi import Request, Response


@dataclass(frozen=True)
class CacheConfig:
    """Caching policy for a route.

    Attributes:
        max_age: Cache lifetime in seconds; 0 sends ``no-cache``.
        public: Allow shared (CDN) caches to store the response.
        etag: Generate an ETag from the response body.
    """

    max_age: int
    public: bool = True
    etag: bool = False

    DEFAULT: ClassVar[CacheConfig]
    LONG: ClassVar[CacheConfig]
    NO_CACHE: ClassVar[CacheConfig]

    @property
    def cache_control(self) -> str:
        if self.max_age <= 0:
            return "no-cache"
        scope = "public" if self.public else "private"
        return f"{scope}, max-age={self.max_age}"


CacheConfig.DEFAULT = CacheConfig(max_age=300, public=True)
CacheConfig.LONG = CacheConfig(max_age=3600, public=True)
CacheConfig.NO_CACHE = CacheConfig(max_age=0, public=False)


def cache_policy(config: CacheConfig) -> Callable[[Request, Response], None]:
    """Build a FastAPI dependency applying ``config`` to GET responses."""

    def apply_cache_headers(request: Request, response: Response) -> None:
        if request.method != "GET":
            return
        response.headers["Cache-Control"] = config.cache_control
        response.headers["Last-Modified"] = formatdate(usegmt=True)
        request.state.cache_config = config

    return apply_cache_headers


def compute_etag(body: bytes) -> str:
    """Quoted MD5 digest of a response body."""
    return f'"{hashlib.md5(body).hexdigest()}"'


async def etag_middleware(request: Request, call_next) -> Response:
    """Attach ETags to cacheable 200 responses and honor If-None-Match."""

    response: Response = await call_next(request)

    config: CacheConfig | None = getattr(request.state, "cache_config", None)
    if config is None or not config.etag or response.status_code != 200:
        return response

    body = b"".join([chunk async for chunk in response.body_iterator])
    if not body:
        return Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )

    etag = compute_etag(body)
    headers = dict(response.headers)
    headers["ETag"] = etag

    if request.headers.get("if-none-match") == etag:
        headers.pop("content-length", None)
        headers.pop("content-type", None)
        return Response(status_code=304, headers=headers)

    return Response(
        content=body,
        status_code=response.status_code,
        headers=headers,
        media_type=response.media_type,
    )
