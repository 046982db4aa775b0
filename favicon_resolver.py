"""Resolve /favicon.ico requests at any mount depth."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config import FAVICON_MAX_AGE_LIMIT, FAVICON_MAX_AGE_SECS, StaticConfigError
from resolution import PASS_THROUGH, ResolutionDecision, ServeFavicon

FAVICON_SUFFIX = "/favicon.ico"


@dataclass(frozen=True, slots=True)
class FaviconConfig:
    path: Path
    max_age: int = FAVICON_MAX_AGE_SECS


def build_favicon_config(path: str | Path, max_age: int = FAVICON_MAX_AGE_SECS) -> FaviconConfig:
    if isinstance(max_age, bool) or not isinstance(max_age, int):
        raise StaticConfigError("favicon max-age must be an integer")
    if not 0 <= max_age <= FAVICON_MAX_AGE_LIMIT:
        raise StaticConfigError(f"favicon max-age must be between 0 and {FAVICON_MAX_AGE_LIMIT}")
    return FaviconConfig(path=Path(path), max_age=max_age)


def resolve_favicon(config: FaviconConfig, request_url: str) -> ResolutionDecision:
    if request_url.endswith(FAVICON_SUFFIX):
        return ServeFavicon(config.path, config.max_age)
    return PASS_THROUGH
