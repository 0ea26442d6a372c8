from fastapi import Request

from backend.src.core.file_store import FileStore
from backend.src.core.notifier import FileLifecycleNotifier


def get_file_store(request: Request) -> FileStore:
    """FileStore created by the application factory."""
    return request.app.state.file_store


def get_notifier(request: Request) -> FileLifecycleNotifier:
    """Process-wide notifier shared by the file routes and the event stream."""
    return request.app.state.notifier
