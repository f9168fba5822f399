from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Optional, Protocol
from uuid import uuid4

from ..domain import StorageError, StoredFile

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
_SUFFIX_PATTERN = re.compile(r"^\.[A-Za-z0-9]{1,16}$")


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """A raw file received from a client, not yet written anywhere."""

    original_name: str
    content: bytes
    mime_type: Optional[str] = None


class UploadService(Protocol):
    def store(self, upload: UploadedFile) -> StoredFile:
        ...


def _safe_suffix(original_name: str) -> str:
    suffix = PurePath(original_name).suffix
    return suffix.lower() if _SUFFIX_PATTERN.match(suffix) else ""


@dataclass(slots=True)
class LocalUploadService:
    """Writes uploads to a directory served under ``url_prefix``.

    Stored files are never removed by the application, including when the
    owning activity is deleted or its insert fails.
    """

    upload_dir: Path
    url_prefix: str = "/uploads"

    def ensure_dir(self) -> Path:
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Unable to create upload directory {self.upload_dir}: {exc}") from exc
        return self.upload_dir

    def stored_name_for(self, original_name: str) -> str:
        return f"{int(time.time() * 1000)}-{uuid4().hex[:12]}{_safe_suffix(original_name)}"

    def store(self, upload: UploadedFile) -> StoredFile:
        target_dir = self.ensure_dir()
        stored_name = self.stored_name_for(upload.original_name)
        target = target_dir / stored_name
        try:
            target.write_bytes(upload.content)
        except OSError as exc:
            raise StorageError(f"Unable to store upload {upload.original_name!r}: {exc}") from exc
        logger.info("Stored upload %s as %s (%d bytes)", upload.original_name, stored_name, len(upload.content))
        return StoredFile(
            stored_name=stored_name,
            original_name=upload.original_name or stored_name,
            mime_type=upload.mime_type or DEFAULT_MIME_TYPE,
            size_bytes=len(upload.content),
            url=f"{self.url_prefix.rstrip('/')}/{stored_name}",
        )


__all__ = ["DEFAULT_MIME_TYPE", "LocalUploadService", "UploadService", "UploadedFile"]
