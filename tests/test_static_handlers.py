"""Unit tests for mapping resolution decisions onto HTTP responses."""

from pathlib import Path

import pytest

from favicon_resolver import build_favicon_config
from handlers.static_handlers import make_favicon_handler, make_static_handler
from request import HTTPRequest
from static_resolver import build_static_config


def _build_request(path: str, method: str = "GET", original_url: str | None = None) -> HTTPRequest:
    return HTTPRequest(
        method=method,
        path=path,
        http_version="HTTP/1.1",
        headers={"host": "localhost"},
        query_params={},
        original_url=original_url,
    )


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "www"
    (root / "docs").mkdir(parents=True)
    (root / "index.html").write_text("<h1>Static file is working</h1>")
    (root / "docs" / "index.html").write_text("<h1>docs</h1>")
    (root / "app.js").write_text("console.log('hi');")
    return root


def test_serve_existing_static_file(site: Path) -> None:
    handler = make_static_handler(build_static_config(site))

    response = handler(_build_request("/index.html"))

    assert response is not None
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/html"
    assert b"Static file is working" in response.body


def test_index_served_for_trailing_slash(site: Path) -> None:
    handler = make_static_handler(build_static_config(site))

    response = handler(_build_request("/docs/"))

    assert response is not None
    assert response.status_code == 200
    assert response.body == b"<h1>docs</h1>"


def test_directory_redirect_uses_303(site: Path) -> None:
    handler = make_static_handler(build_static_config(site))

    response = handler(_build_request("/docs"))

    assert response is not None
    assert response.status_code == 303
    assert response.headers["Location"] == "/docs/"
    assert response.body == b""


def test_directory_redirect_uses_original_url(site: Path) -> None:
    handler = make_static_handler(build_static_config(site))

    response = handler(_build_request("/docs", original_url="/mnt/docs"))

    assert response is not None
    assert response.headers["Location"] == "/mnt/docs/"


def test_missing_static_file_passes_through(site: Path) -> None:
    handler = make_static_handler(build_static_config(site))

    assert handler(_build_request("/does-not-exist.css")) is None


def test_traversal_attempt_passes_through(site: Path) -> None:
    handler = make_static_handler(build_static_config(site))

    assert handler(_build_request("/../www/index.html")) is None


def test_non_get_methods_pass_through(site: Path) -> None:
    handler = make_static_handler(build_static_config(site))

    assert handler(_build_request("/index.html", method="POST")) is None


def test_unreadable_static_file_passes_through(
    site: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    handler = make_static_handler(build_static_config(site))

    def _fail_read(_self: Path) -> bytes:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "read_bytes", _fail_read)

    assert handler(_build_request("/app.js")) is None


def test_favicon_served_with_cache_headers(tmp_path: Path) -> None:
    icon = tmp_path / "favicon.ico"
    icon.write_bytes(b"\x00\x00\x01\x00")
    handler = make_favicon_handler(build_favicon_config(icon, max_age=255))

    response = handler(_build_request("/static/favicon.ico"))

    assert response is not None
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "image/x-icon"
    assert response.headers["Cache-Control"] == "public, max-age=255"
    assert response.body == b"\x00\x00\x01\x00"


def test_missing_favicon_is_terminal_500(tmp_path: Path) -> None:
    handler = make_favicon_handler(build_favicon_config(tmp_path / "missing.ico", max_age=255))

    response = handler(_build_request("/favicon.ico"))

    assert response is not None
    assert response.status_code == 500
    assert response.body == b"Internal Server Error"


def test_favicon_handler_ignores_other_paths(tmp_path: Path) -> None:
    handler = make_favicon_handler(build_favicon_config(tmp_path / "favicon.ico"))

    assert handler(_build_request("/favicon.ico.bak")) is None


def test_encoded_slash_redirect_stays_on_site(site: Path) -> None:
    (site / "evil.com").mkdir()
    (site / "evil.com" / "index.html").write_text("x")
    handler = make_static_handler(build_static_config(site))

    response = handler(HTTPRequest.from_target("GET", "/%2Fevil.com"))

    assert response is not None
    assert response.status_code == 303
    assert response.headers["Location"] == "/evil.com/"
