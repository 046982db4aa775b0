"""Handlers that turn resolution decisions into HTTP responses.

A handler returns None to let the next handler in the chain answer the
request.
"""

import logging

from chain import Handler
from favicon_resolver import FaviconConfig, resolve_favicon
from request import HTTPRequest
from resolution import RedirectToDirectory, ServeFavicon, ServeFile, ServeIndex
from response import HTTPResponse
from static_resolver import StaticConfig, resolve_static
from utils import get_content_type

logger = logging.getLogger(__name__)

SERVABLE_METHODS = {"GET", "HEAD"}
FAVICON_CONTENT_TYPE = "image/x-icon"


def make_static_handler(config: StaticConfig) -> Handler:
    def serve_static(request: HTTPRequest) -> HTTPResponse | None:
        if request.method not in SERVABLE_METHODS:
            return None

        decision = resolve_static(config, request.path, request.original_url)
        if isinstance(decision, RedirectToDirectory):
            return HTTPResponse(
                status_code=303,
                headers={"Location": decision.location},
                body=b"",
            )
        if not isinstance(decision, (ServeFile, ServeIndex)):
            return None

        try:
            body = decision.path.read_bytes()
        except OSError as exc:
            logger.warning("Could not read %s, passing request on: %s", decision.path, exc)
            return None

        return HTTPResponse(
            status_code=200,
            headers={"Content-Type": get_content_type(decision.path)},
            body=body,
        )

    return serve_static


def make_favicon_handler(config: FaviconConfig) -> Handler:
    def serve_favicon(request: HTTPRequest) -> HTTPResponse | None:
        decision = resolve_favicon(config, request.path)
        if not isinstance(decision, ServeFavicon):
            return None

        try:
            body = decision.path.read_bytes()
        except OSError:
            logger.error("Failed to read favicon %s", decision.path, exc_info=True)
            return HTTPResponse(status_code=500, body="Internal Server Error")

        return HTTPResponse(
            status_code=200,
            headers={
                "Content-Type": FAVICON_CONTENT_TYPE,
                "Cache-Control": f"public, max-age={decision.max_age}",
            },
            body=body,
        )

    return serve_favicon
