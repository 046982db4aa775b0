"""HTTP request model handed to handlers."""

from dataclasses import dataclass, field, replace
from urllib.parse import parse_qs, unquote, urlsplit


@dataclass(slots=True)
class HTTPRequest:
    method: str
    path: str
    http_version: str = "HTTP/1.1"
    raw_target: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, list[str]] = field(default_factory=dict)
    original_url: str | None = None

    @classmethod
    def from_target(
        cls,
        method: str,
        target: str,
        *,
        http_version: str = "HTTP/1.1",
        headers: dict[str, str] | None = None,
    ) -> "HTTPRequest":
        """Build a request from an already-parsed request line.

        The path is percent-decoded here so handlers only ever see decoded
        paths. Origin-form targets are split on "?" directly so a leading "//"
        stays part of the path. Header names are lower-cased.
        """
        if target.startswith("/"):
            raw_path, _, raw_query = target.partition("#")[0].partition("?")
        else:
            parsed_target = urlsplit(target)
            raw_path, raw_query = parsed_target.path, parsed_target.query
        path = unquote(raw_path) or "/"
        normalized_headers = {
            name.strip().lower(): value.strip() for name, value in (headers or {}).items()
        }
        return cls(
            method=method.upper(),
            path=path,
            http_version=http_version,
            raw_target=target,
            headers=normalized_headers,
            query_params=parse_qs(raw_query, keep_blank_values=True),
        )

    def with_method(self, method: str) -> "HTTPRequest":
        return replace(self, method=method, headers=dict(self.headers))

    def with_path(self, path: str, *, original_url: str) -> "HTTPRequest":
        return replace(self, path=path, original_url=original_url, headers=dict(self.headers))
