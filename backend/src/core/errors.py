"""
Exceptions raised by the storage and decoding layers.

The API layer maps each of these to one HTTP status code; nothing here is
fatal to the process.
"""


class FileStoreError(Exception):
    """Filesystem read, write or delete failure."""


class StoredFileNotFoundError(FileStoreError):
    """No stored file exists under the requested identity."""

    def __init__(self, identity: str):
        super().__init__(f"File not found: {identity}")
        self.identity = identity


class IdentityConflictError(FileStoreError):
    """An upload produced an identity that is already taken."""

    def __init__(self, identity: str):
        super().__init__(f"Stored identity already exists: {identity}")
        self.identity = identity


class TabularDecodeError(Exception):
    """Stored bytes could not be converted into rows."""
