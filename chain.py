"""Ordered handler chain with pass-through semantics."""

import logging
from collections.abc import Callable

from request import HTTPRequest
from response import HTTPResponse, as_head_response

logger = logging.getLogger(__name__)

Handler = Callable[[HTTPRequest], HTTPResponse | None]


class HandlerChain:
    def __init__(self) -> None:
        self._handlers: list[Handler] = []

    def add(self, handler: Handler) -> None:
        if not callable(handler):
            raise ValueError("handler must be callable")
        self._handlers.append(handler)

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return tuple(self._handlers)

    def dispatch(self, request: HTTPRequest) -> HTTPResponse:
        """Return the first answer from the chain, or 404 when every handler passes."""
        if request.method == "HEAD":
            return as_head_response(self._dispatch(request.with_method("GET")))
        return self._dispatch(request)

    def _dispatch(self, request: HTTPRequest) -> HTTPResponse:
        for handler in self._handlers:
            try:
                response = handler(request)
            except Exception:
                logger.exception("Unhandled error in handler for %s", request.path)
                return HTTPResponse(status_code=500, body="Internal Server Error")
            if response is not None:
                return response
        return HTTPResponse(status_code=404, body="Not Found")
