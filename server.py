"""Threaded HTTP host that runs requests through the static handler chain."""

from __future__ import annotations

import argparse
import json
import logging
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from chain import HandlerChain
from config import (
    FAVICON_MAX_AGE_SECS,
    FAVICON_PATH,
    HOST,
    LOG_FORMAT,
    MOUNT_PATH,
    PORT,
    STATIC_ALIAS,
    STATIC_DIR,
)
from favicon_resolver import FaviconConfig, build_favicon_config
from handlers.static_handlers import make_favicon_handler, make_static_handler
from mount import mounted, normalize_mount_path
from request import HTTPRequest
from response import HTTPResponse
from static_resolver import StaticConfig, build_static_config

logger = logging.getLogger(__name__)


def build_chain(
    static_config: StaticConfig,
    favicon_config: FaviconConfig | None = None,
    mount_path: str = MOUNT_PATH,
) -> HandlerChain:
    """Favicon first, then the static root (optionally under a mount point)."""
    chain = HandlerChain()
    if favicon_config is not None:
        chain.add(make_favicon_handler(favicon_config))
    chain.add(mounted(mount_path, make_static_handler(static_config)))
    return chain


class StaticRequestHandler(BaseHTTPRequestHandler):
    server: StaticHTTPServer

    def _handle(self) -> None:
        started_at = time.perf_counter()
        request = HTTPRequest.from_target(
            self.command,
            self.path,
            http_version=self.request_version,
            headers=dict(self.headers.items()),
        )
        response = self.server.chain.dispatch(request)
        response.headers["Connection"] = "close"
        self.close_connection = True
        payload = response.to_bytes()
        self.wfile.write(payload)
        self.server.log_access(
            client=self.client_address[0],
            request=request,
            response=response,
            bytes_out=len(payload),
            started_at=started_at,
        )

    do_GET = _handle
    do_HEAD = _handle
    do_POST = _handle
    do_PUT = _handle
    do_DELETE = _handle
    do_OPTIONS = _handle
    do_PATCH = _handle

    def log_message(self, format: str, *args: object) -> None:
        logger.debug(format, *args)


class StaticHTTPServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(
        self,
        chain: HandlerChain,
        host: str = HOST,
        port: int = PORT,
        *,
        log_format: str = LOG_FORMAT,
    ) -> None:
        self.chain = chain
        self.log_format = log_format
        super().__init__((host, port), StaticRequestHandler)

    @property
    def host(self) -> str:
        return self.server_address[0]

    @property
    def port(self) -> int:
        return self.server_address[1]

    def log_access(
        self,
        *,
        client: str,
        request: HTTPRequest,
        response: HTTPResponse,
        bytes_out: int,
        started_at: float,
    ) -> None:
        duration_ms = (time.perf_counter() - started_at) * 1000
        event = {
            "client": client,
            "method": request.method,
            "path": request.path,
            "status": response.status_code,
            "bytes_out": bytes_out,
            "latency_ms": round(duration_ms, 3),
        }
        if self.log_format == "json":
            logger.info(json.dumps(event, sort_keys=True))
            return

        logger.info(
            "client=%s method=%s path=%s status=%s bytes_out=%s duration_ms=%.2f",
            event["client"],
            event["method"],
            event["path"],
            event["status"],
            event["bytes_out"],
            duration_ms,
        )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve static assets from a root directory")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--root", default=STATIC_DIR)
    parser.add_argument("--alias", default=STATIC_ALIAS)
    parser.add_argument("--mount", default=MOUNT_PATH)
    parser.add_argument("--favicon", default=FAVICON_PATH)
    parser.add_argument("--no-favicon", action="store_true")
    parser.add_argument("--favicon-max-age", type=int, default=FAVICON_MAX_AGE_SECS)
    parser.add_argument("--log-format", choices=["plain", "json"], default=LOG_FORMAT)
    args = parser.parse_args(argv)

    try:
        args.static_config = build_static_config(args.root, args.alias)
        args.favicon_config = (
            None if args.no_favicon else build_favicon_config(args.favicon, args.favicon_max_age)
        )
        args.mount = normalize_mount_path(args.mount)
    except ValueError as exc:
        parser.error(str(exc))
    return args


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    chain = build_chain(args.static_config, args.favicon_config, args.mount)
    server = StaticHTTPServer(chain, args.host, args.port, log_format=args.log_format)
    logger.info("Serving %s on http://%s:%s%s", args.root, server.host, server.port, args.mount)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
