"""Utility helpers shared across server modules."""

import mimetypes
from pathlib import Path

mimetypes.add_type("image/x-icon", ".ico")


def get_content_type(file_path: Path) -> str:
    content_type, _encoding = mimetypes.guess_type(file_path.name)
    return content_type or "application/octet-stream"
