from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile

from errors import UnsupportedFileTypeError
from parsers.pdf import pdf_to_text

SUPPORTED_EXTENSIONS = (".txt", ".pdf")


def file_extension(filename: Optional[str]) -> str:
    """Lowercase extension of ``filename`` including the dot, or "" when it has none."""
    if not filename:
        return ""
    return os.path.splitext(filename)[1].lower()


def is_supported(extension: str) -> bool:
    return extension.lower() in SUPPORTED_EXTENSIONS


def extract_text(buffer: bytes, extension: str) -> str:
    """Turn an uploaded file buffer into plain text, dispatching on its extension."""
    ext = extension.lower()
    if ext == ".txt":
        return buffer.decode("utf-8", errors="replace")
    if ext == ".pdf":
        return pdf_to_text(buffer)
    raise UnsupportedFileTypeError("Unsupported file type")


@dataclass(frozen=True)
class UploadedFile:
    """A file received in one request; lives only for that request."""

    original_name: str
    extension: str
    raw_bytes: bytes

    @classmethod
    async def from_upload(cls, upload: UploadFile) -> "UploadedFile":
        name = upload.filename or ""
        data = await upload.read()
        return cls(original_name=name, extension=file_extension(name), raw_bytes=data)

    @property
    def is_supported(self) -> bool:
        return is_supported(self.extension)

    def extract(self) -> str:
        return extract_text(self.raw_bytes, self.extension)
