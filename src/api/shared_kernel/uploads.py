"""Uploaded file value object shared by document and image uploads."""

from __future__ import annotations

import re
from dataclasses import dataclass

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


@dataclass(frozen=True)
class UploadedFile:
    """A binary file received from a caller, held in memory for one request."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    def __repr__(self) -> str:
        return (
            f"UploadedFile(filename={self.filename!r}, size={self.size}, "
            f"content_type={self.content_type!r})"
        )

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_empty(self) -> bool:
        """Browsers submit an empty part when no file was chosen."""
        return self.size == 0

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot, or "bin" when absent."""
        _, dot, ext = self.filename.rpartition(".")
        ext = ext.lower()
        if not dot or not ext or not ext.isalnum():
            return "bin"
        return ext

    @property
    def sanitized_filename(self) -> str:
        """Filename safe for use as a storage path segment."""
        return _UNSAFE_FILENAME_CHARS.sub("_", self.filename) or "file"
