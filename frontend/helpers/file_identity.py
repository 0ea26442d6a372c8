"""Display helpers for stored identities (``<millisecond-timestamp>-<original name>``)."""

from datetime import datetime
from typing import Optional

from backend.src.core.models import StoredFile


def get_file_name(identity: str) -> str:
    """Original file name: the identity without its timestamp prefix."""
    stored = StoredFile.parse(identity)
    return stored.display_name if stored else identity


def get_upload_time(identity: str) -> Optional[datetime]:
    stored = StoredFile.parse(identity)
    if stored is None:
        return None
    try:
        return datetime.fromtimestamp(stored.uploaded_at_ms / 1000)
    except (OverflowError, OSError, ValueError):
        return None


def get_time_string(identity: str) -> str:
    """Local upload time, or "-" for names without a timestamp."""
    uploaded = get_upload_time(identity)
    return uploaded.strftime("%Y-%m-%d %H:%M:%S") if uploaded else "-"
