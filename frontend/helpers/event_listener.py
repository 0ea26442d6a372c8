"""
Background consumer of the /api/events stream.

Streamlit reruns the page script on every interaction, so the listener only
records incoming lifecycle messages; the file list drains them on its next
poll. The listener reconnects after a dropped stream and stops by itself
once the object it serves has been garbage collected.
"""

import json
import threading
import weakref
from typing import Any, Iterable, Iterator, List, NamedTuple, Optional

import requests

from backend.src.core.config import EVENT_LABELS
from frontend import frontend_config as config
from frontend.helpers.api_client import ApiError
from frontend.helpers.logger import get_logger

logger = get_logger(__name__)

# Wire event name -> lifecycle kind
EVENT_KINDS = {label: kind for kind, label in EVENT_LABELS.items()}


class LifecycleMessage(NamedTuple):
    kind: str
    file_identity: str


def parse_event_stream(lines: Iterable[str]) -> Iterator[LifecycleMessage]:
    """
    Turn text/event-stream lines into lifecycle messages.

    Comment lines and unknown event names are skipped; a message is
    dispatched on the blank line that ends it.
    """
    event_name = "message"
    data: List[str] = []
    for line in lines:
        if line is None:
            continue
        if isinstance(line, bytes):
            line = line.decode("utf-8")
        line = line.rstrip("\r")

        if not line:
            if data and event_name in EVENT_KINDS:
                payload = "\n".join(data)
                try:
                    identity = json.loads(payload)
                except json.JSONDecodeError:
                    logger.warning(f"Ignoring malformed event payload: {payload!r}")
                else:
                    yield LifecycleMessage(EVENT_KINDS[event_name], str(identity))
            event_name = "message"
            data = []
            continue
        if line.startswith(":"):
            continue

        name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if name == "event":
            event_name = value
        elif name == "data":
            data.append(value)


class FileEventListener:
    """Daemon thread that keeps one event-stream connection open."""

    def __init__(self, client, owner: Any = None, reconnect_seconds: float = config.EVENT_RECONNECT_SECONDS):
        self.client = client
        self.reconnect_seconds = reconnect_seconds
        self._owner = weakref.ref(owner) if owner is not None else None
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._pending: List[LifecycleMessage] = []
        self._response: Optional[requests.Response] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _owner_alive(self) -> bool:
        return self._owner is None or self._owner() is not None

    def start(self) -> "FileEventListener":
        if not self.running:
            self._stopped.clear()
            self._thread = threading.Thread(target=self._run, name="file-event-listener", daemon=True)
            self._thread.start()
        return self

    def stop(self, timeout: float = 2.0) -> None:
        """Close the stream and wait for the thread to exit."""
        self._stopped.set()
        with self._lock:
            response = self._response
        if response is not None:
            response.close()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def record(self, message: LifecycleMessage) -> None:
        with self._lock:
            self._pending.append(message)

    def drain(self) -> List[LifecycleMessage]:
        """Messages received since the last call."""
        with self._lock:
            pending, self._pending = self._pending, []
        return pending

    def _should_run(self) -> bool:
        return not self._stopped.is_set() and self._owner_alive()

    def _lines_while_running(self, lines: Iterable[str]) -> Iterator[str]:
        for line in lines:
            if not self._should_run():
                return
            yield line

    def _run(self) -> None:
        while self._should_run():
            try:
                response = self.client.open_event_stream()
                with self._lock:
                    self._response = response
                logger.info("Connected to event stream")
                lines = response.iter_lines(decode_unicode=True)
                for message in parse_event_stream(self._lines_while_running(lines)):
                    self.record(message)
            # AttributeError/ValueError: the response was closed under us by stop()
            except (ApiError, requests.exceptions.RequestException, AttributeError, ValueError) as e:
                if self._should_run():
                    logger.warning(f"Event stream dropped: {e}")
            finally:
                with self._lock:
                    response, self._response = self._response, None
                if response is not None:
                    response.close()
            self._stopped.wait(self.reconnect_seconds)
        logger.info("Event listener stopped")
