"""CORS and scrape rate limiting middleware."""

import time
from collections import defaultdict
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from electorate_scraper.core.config import Settings


def get_client_ip(request: Request) -> str:
    """Leftmost ``X-Forwarded-For`` address, else the direct peer, else ``"unknown"``."""
    forwarded = request.headers.get("X-Forwarded-For", "").strip()
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    kwargs: dict[str, Any] = {
        "allow_methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["authorization", "content-type", "x-client-info", "apikey"],
    }
    if settings.cors_origin_list:
        kwargs["allow_origins"] = settings.cors_origin_list
    if settings.cors_origin_regex.strip():
        kwargs["allow_origin_regex"] = settings.cors_origin_regex.strip()
    app.add_middleware(CORSMiddleware, **kwargs)


class ScrapeRateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory sliding-window limit on POST requests under ``path_prefix``.

    Each scrape issues several upstream requests, so only scrape submissions
    are counted; reads pass through.
    """

    def __init__(self, app: ASGIApp, path_prefix: str, requests_per_minute: int = 10) -> None:
        super().__init__(app)
        self.path_prefix = path_prefix
        self.requests_per_minute = requests_per_minute
        self._request_times: dict[str, list[float]] = defaultdict(list)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method != "POST" or not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = get_client_ip(request)
        now = time.time()
        window_start = now - 60.0
        self._request_times[client_ip] = [t for t in self._request_times[client_ip] if t > window_start]

        if len(self._request_times[client_ip]) >= self.requests_per_minute:
            return Response(
                content='{"detail":"Rate limit exceeded"}',
                status_code=429,
                media_type="application/json",
            )

        self._request_times[client_ip].append(now)
        return await call_next(request)
