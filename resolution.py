"""Resolution decisions produced by the static and favicon resolvers."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ServeFile:
    path: Path


@dataclass(frozen=True, slots=True)
class ServeIndex:
    """Serve an index document for a request path that already ends in '/'."""

    path: Path


@dataclass(frozen=True, slots=True)
class RedirectToDirectory:
    """The directory has an index document but the request lacks a trailing slash."""

    location: str


@dataclass(frozen=True, slots=True)
class ServeFavicon:
    path: Path
    max_age: int


@dataclass(frozen=True, slots=True)
class PassThrough:
    """No match; the next handler in the chain should run."""


PASS_THROUGH = PassThrough()

ResolutionDecision = ServeFile | ServeIndex | RedirectToDirectory | ServeFavicon | PassThrough
