import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from backend.src.core.config import EVENT_LABELS

# <millisecond-timestamp>-<original-filename>
IDENTITY_PATTERN = re.compile(r"^(\d+)-(.+)$")


class LifecycleEventKind(str, Enum):
    """Kinds of file lifecycle notifications."""
    UPLOADED = "uploaded"
    DELETED = "deleted"

    @property
    def label(self) -> str:
        """Event name used on the event stream."""
        return EVENT_LABELS[self.value]


@dataclass(frozen=True)
class StoredFile:
    """A stored upload, addressed by its generated identity."""
    identity: str
    uploaded_at_ms: int
    display_name: str

    @classmethod
    def build(cls, timestamp_ms: int, original_name: str) -> "StoredFile":
        return cls(
            identity=f"{timestamp_ms}-{original_name}",
            uploaded_at_ms=timestamp_ms,
            display_name=original_name,
        )

    @classmethod
    def parse(cls, identity: str) -> Optional["StoredFile"]:
        """Split an identity into timestamp and display name, or None if malformed."""
        match = IDENTITY_PATTERN.match(identity)
        if not match:
            return None
        return cls(
            identity=identity,
            uploaded_at_ms=int(match.group(1)),
            display_name=match.group(2),
        )


@dataclass(frozen=True)
class FileLifecycleEvent:
    kind: LifecycleEventKind
    file_identity: str

    def to_sse(self) -> str:
        """Frame the event as one server-sent-events message."""
        return f"event: {self.kind.label}\ndata: {json.dumps(self.file_identity)}\n\n"
