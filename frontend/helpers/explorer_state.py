"""
Per-session state of the CSV explorer page.

Holds the file listing, the selected file with its decoded dataset and the
active SortSpec. Every API failure is caught and logged here and leaves the
previous state untouched; methods report success as a bool so the page can
show a message.
"""

from typing import Iterable, List, Optional

from frontend.helpers.api_client import ApiError, FileApiClient
from frontend.helpers.event_listener import LifecycleMessage
from frontend.helpers.logger import get_logger
from frontend.helpers.sort_engine import (
    DatasetError,
    SortSpec,
    TabularDataset,
    UnknownColumnError,
    apply_sort,
    on_column_activated,
)

logger = get_logger(__name__)


class ExplorerState:
    def __init__(self):
        self.files: List[str] = []
        self.selected_identity: Optional[str] = None
        self.dataset: Optional[TabularDataset] = None
        self.sort_spec = SortSpec()
        self.last_error: Optional[str] = None

    def _fail(self, action: str, error: Exception) -> bool:
        self.last_error = f"{action}: {error}"
        logger.error(f"Error {action.lower()}: {error}")
        return False

    def refresh_files(self, client: FileApiClient) -> bool:
        try:
            self.files = client.list_files()
        except ApiError as e:
            return self._fail("Getting file names", e)
        return True

    def upload(self, client: FileApiClient, file_name: str, content: bytes) -> bool:
        try:
            client.upload_file(file_name, content)
        except ApiError as e:
            return self._fail("Uploading file", e)
        self.refresh_files(client)
        return True

    def select_file(self, client: FileApiClient, identity: str) -> bool:
        """
        Load a stored file into the data table.

        Selecting the file that is already shown does nothing. A new
        dataset resets the sort to the default.
        """
        if identity == self.selected_identity and self.dataset is not None:
            return True
        try:
            dataset = TabularDataset.from_records(client.get_file_data(identity))
        except (ApiError, DatasetError) as e:
            return self._fail("Getting file data", e)

        self.selected_identity = identity
        self.dataset = dataset
        self.sort_spec = SortSpec()
        return True

    def clear_selection(self) -> None:
        self.selected_identity = None
        self.dataset = None
        self.sort_spec = SortSpec()

    def activate_column(self, column_name: str) -> bool:
        """Header click: update the SortSpec and reorder rows in place."""
        if self.dataset is None:
            return False
        try:
            spec = on_column_activated(self.sort_spec, column_name, self.dataset)
        except UnknownColumnError as e:
            return self._fail("Sorting", e)
        apply_sort(self.dataset, spec)
        self.sort_spec = spec
        return True

    def delete_file(self, client: FileApiClient, identity: str) -> bool:
        try:
            client.delete_file(identity)
        except ApiError as e:
            return self._fail("Deleting file", e)
        if identity == self.selected_identity:
            self.clear_selection()
        self.refresh_files(client)
        return True

    def apply_events(self, client: FileApiClient, messages: Iterable[LifecycleMessage]) -> bool:
        """React to lifecycle events from other sessions. True if anything arrived."""
        messages = list(messages)
        if not messages:
            return False
        for message in messages:
            if message.kind == "deleted" and message.file_identity == self.selected_identity:
                self.clear_selection()
        self.refresh_files(client)
        return True
