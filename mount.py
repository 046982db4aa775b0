"""Mount a handler under a URL sub-path."""

from chain import Handler
from request import HTTPRequest
from response import HTTPResponse


def normalize_mount_path(mount_path: str) -> str:
    if not mount_path.startswith("/"):
        raise ValueError("mount path must start with '/'")
    return mount_path.rstrip("/") or "/"


def mount_request(request: HTTPRequest, mount_path: str) -> HTTPRequest | None:
    """Rewrite a request so its path is relative to the mount point.

    The pre-rewrite path is kept as ``original_url`` so redirects issued by
    the mounted handler still point at the externally visible URL. Returns
    None when the request lies outside the mount.
    """
    prefix = normalize_mount_path(mount_path)
    if prefix == "/":
        return request

    if request.path == prefix:
        remainder = ""
    elif request.path.startswith(prefix + "/"):
        remainder = request.path[len(prefix):]
    else:
        return None

    original_url = request.original_url or request.path
    return request.with_path(remainder, original_url=original_url)


def mounted(mount_path: str, handler: Handler) -> Handler:
    prefix = normalize_mount_path(mount_path)

    def dispatch_mounted(request: HTTPRequest) -> HTTPResponse | None:
        inner_request = mount_request(request, prefix)
        if inner_request is None:
            return None
        return handler(inner_request)

    return dispatch_mounted
