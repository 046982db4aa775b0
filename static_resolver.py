"""Map request paths onto files under a static root directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from config import INDEX_FILE_NAME, StaticConfigError
from resolution import (
    PASS_THROUGH,
    RedirectToDirectory,
    ResolutionDecision,
    ServeFile,
    ServeIndex,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StaticConfig:
    root: Path
    alias: str | None = None
    index_file: str = INDEX_FILE_NAME

    def matches_alias(self, request_url: str) -> bool:
        return self.alias is None or request_url.startswith(self.alias)

    def strip_alias(self, request_url: str) -> str:
        if self.alias is None:
            return request_url
        return request_url.removeprefix(self.alias)


def build_static_config(
    root: str | Path,
    alias: str | None = None,
    *,
    index_file: str = INDEX_FILE_NAME,
) -> StaticConfig:
    """Validate settings and return an immutable static resolver config."""
    if alias is not None:
        if not alias:
            raise StaticConfigError("alias cannot be empty")
        if not alias.startswith("/"):
            raise StaticConfigError("alias must start with '/'")
        if ".." in alias.split("/"):
            raise StaticConfigError("alias cannot contain '..' segments")

    if not index_file or "/" in index_file or index_file in {".", ".."}:
        raise StaticConfigError(f"invalid index file name: {index_file!r}")

    return StaticConfig(root=Path(root), alias=alias, index_file=index_file)


def split_relative_path(requested_path: str) -> list[str] | None:
    """Split a requested path into root-relative segments.

    Empty and '.' segments are dropped so a leading or doubled slash can never
    produce an absolute path. Returns None when the path tries to climb out of
    the root or carries a NUL byte.
    """
    if "\x00" in requested_path:
        return None

    segments: list[str] = []
    for segment in requested_path.split("/"):
        if segment in {"", "."}:
            continue
        if segment == "..":
            return None
        segments.append(segment)
    return segments


def redirect_location(request_url: str, original_url: str | None = None) -> str:
    """Directory URL with exactly one leading and one trailing slash."""
    base = original_url if original_url is not None else request_url
    stripped = base.strip("/")
    if not stripped:
        return "/"
    return f"/{stripped}/"


def is_within_root(root: Path, candidate: Path) -> bool:
    try:
        candidate.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True


def resolve_static(
    config: StaticConfig,
    request_url: str,
    original_url: str | None = None,
) -> ResolutionDecision:
    if not config.matches_alias(request_url):
        return PASS_THROUGH

    requested_path = config.strip_alias(request_url)
    segments = split_relative_path(requested_path)
    if segments is None:
        logger.warning("Rejected path outside static root: %r", request_url)
        return PASS_THROUGH

    file_path = config.root.joinpath(*segments)
    if file_path.is_file():
        if not is_within_root(config.root, file_path):
            logger.warning("Rejected link outside static root: %r", request_url)
            return PASS_THROUGH
        logger.debug("Resolved %s to file %s", request_url, file_path)
        return ServeFile(file_path)

    index_path = file_path / config.index_file
    if not index_path.is_file():
        return PASS_THROUGH
    if not is_within_root(config.root, index_path):
        logger.warning("Rejected link outside static root: %r", request_url)
        return PASS_THROUGH

    if request_url.endswith("/"):
        logger.debug("Resolved %s to index %s", request_url, index_path)
        return ServeIndex(index_path)

    location = redirect_location(request_url, original_url)
    logger.debug("Redirecting %s to directory %s", request_url, location)
    return RedirectToDirectory(location)
