"""
FileStore - uploaded CSV files on disk.

Each upload is written once under ``<millisecond-timestamp>-<original-filename>``
inside the upload directory. Files are never rewritten; they are listed by
enumerating the directory and removed on delete.
"""

import os
import time
from typing import Callable, List, Optional

from backend.src.core.errors import (
    FileStoreError,
    IdentityConflictError,
    StoredFileNotFoundError,
)
from backend.src.core.logger import get_logger
from backend.src.core.models import StoredFile

logger = get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class FileStore:
    """Filesystem-backed storage addressed by stored identity."""

    def __init__(self, upload_dir: str, clock: Optional[Callable[[], int]] = None):
        self.upload_dir = os.path.abspath(upload_dir)
        self._clock = clock or _now_ms
        os.makedirs(self.upload_dir, exist_ok=True)

    def save(self, original_name: str, content: bytes) -> StoredFile:
        """
        Persist uploaded bytes under a freshly generated identity.

        Raises:
            ValueError: If the original name has no usable file name part.
            IdentityConflictError: If the generated identity already exists.
            FileStoreError: If the write fails.
        """
        name = os.path.basename((original_name or "").replace("\\", "/"))
        if not name or name in (".", ".."):
            raise ValueError("Uploaded file has no name")

        stored = StoredFile.build(self._clock(), name)
        path = os.path.join(self.upload_dir, stored.identity)
        try:
            # "x" mode refuses to overwrite a file uploaded in the same millisecond
            with open(path, "xb") as f:
                f.write(content)
        except FileExistsError:
            raise IdentityConflictError(stored.identity)
        except OSError as e:
            raise FileStoreError(f"Error writing {stored.identity}: {e}") from e

        logger.info(f"Stored '{name}' as '{stored.identity}' ({len(content)} bytes)")
        return stored

    def list_identities(self) -> List[str]:
        """Identities of all stored files, oldest upload first."""
        try:
            names = os.listdir(self.upload_dir)
        except OSError as e:
            raise FileStoreError(f"Error reading upload directory: {e}") from e

        stored = []
        for name in names:
            parsed = StoredFile.parse(name)
            if parsed and os.path.isfile(os.path.join(self.upload_dir, name)):
                stored.append(parsed)
        stored.sort(key=lambda s: (s.uploaded_at_ms, s.display_name))
        return [s.identity for s in stored]

    def resolve(self, identity: str) -> str:
        """Return the absolute path for an identity that currently exists."""
        if (
            "/" in identity
            or "\\" in identity
            or identity in (".", "..")
            or StoredFile.parse(identity) is None
        ):
            raise StoredFileNotFoundError(identity)
        path = os.path.join(self.upload_dir, identity)
        if not os.path.isfile(path):
            raise StoredFileNotFoundError(identity)
        return path

    def read_text(self, identity: str, encoding: str = "utf-8") -> str:
        path = self.resolve(identity)
        try:
            with open(path, "r", encoding=encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileStoreError(f"Error reading {identity}: {e}") from e

    def delete(self, identity: str) -> None:
        """
        Remove a stored file.

        A concurrent delete that wins the race leaves this call with a
        FileStoreError rather than a silent success.
        """
        path = self.resolve(identity)
        try:
            os.remove(path)
        except OSError as e:
            raise FileStoreError(f"Error deleting {identity}: {e}") from e
        logger.info(f"Deleted '{identity}'")
