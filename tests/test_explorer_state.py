"""
Tests for ExplorerState, the per-session controller behind the page.
"""

import pytest

from frontend.helpers.api_client import ApiError
from frontend.helpers.event_listener import LifecycleMessage
from frontend.helpers.explorer_state import ExplorerState
from frontend.helpers.sort_engine import SortSpec
from backend.src.core.models import LifecycleEventKind


class FakeClient:
    """In-memory stand-in for FileApiClient."""

    def __init__(self, files=None):
        self.files = dict(files or {})
        self.calls = []
        self.fail = set()

    def _call(self, name):
        self.calls.append(name)
        if name in self.fail:
            raise ApiError(f"{name} failed", 500)

    def list_files(self):
        self._call("list_files")
        return sorted(self.files)

    def upload_file(self, name, content):
        self._call("upload_file")
        self.files[f"{len(self.files) + 1}-{name}"] = []
        return "File uploaded successfully"

    def get_file_data(self, identity):
        self._call("get_file_data")
        if identity not in self.files:
            raise ApiError("File not found", 404)
        return self.files[identity]

    def delete_file(self, identity):
        self._call("delete_file")
        if identity not in self.files:
            raise ApiError("File not found", 404)
        del self.files[identity]
        return "File deleted successfully"


REPORT = [{"a": 2, "b": "y"}, {"a": 1, "b": "x"}]


@pytest.fixture
def fake():
    return FakeClient({"1-report.csv": REPORT, "2-empty.csv": [], "3-other.csv": [{"c": "z"}]})


@pytest.fixture
def state(fake):
    state = ExplorerState()
    state.refresh_files(fake)
    return state


def test_refresh_failure_keeps_previous_listing(state, fake):
    fake.fail.add("list_files")

    assert state.refresh_files(fake) is False
    assert state.files == ["1-report.csv", "2-empty.csv", "3-other.csv"]
    assert "list_files failed" in state.last_error


def test_select_loads_dataset_and_resets_sort(state, fake):
    assert state.select_file(fake, "1-report.csv")
    state.activate_column("a")

    assert state.select_file(fake, "3-other.csv")
    assert state.selected_identity == "3-other.csv"
    assert state.dataset.columns == ["c"]
    assert state.sort_spec == SortSpec()


def test_selecting_the_active_file_is_a_no_op(state, fake):
    state.select_file(fake, "1-report.csv")
    state.activate_column("a")
    fetches = fake.calls.count("get_file_data")

    assert state.select_file(fake, "1-report.csv")

    assert fake.calls.count("get_file_data") == fetches
    assert state.sort_spec.column_name == "a"


@pytest.mark.parametrize("identity", ["9-unknown.csv", "2-empty.csv"])
def test_failed_selection_keeps_previous_dataset(state, fake, identity):
    state.select_file(fake, "1-report.csv")
    dataset = state.dataset

    assert state.select_file(fake, identity) is False

    assert state.selected_identity == "1-report.csv"
    assert state.dataset is dataset


def test_activate_column_sorts_rows(state, fake):
    state.select_file(fake, "1-report.csv")

    assert state.activate_column("a")
    assert [row["a"].raw for row in state.dataset.rows] == [1, 2]
    assert state.activate_column("a")
    assert [row["a"].raw for row in state.dataset.rows] == [2, 1]
    assert state.sort_spec == SortSpec("a", True, False)


def test_activate_column_without_dataset_or_unknown_column(state, fake):
    assert state.activate_column("a") is False

    state.select_file(fake, "1-report.csv")
    assert state.activate_column("zzz") is False
    assert state.sort_spec == SortSpec()


def test_upload_refreshes_listing(state, fake):
    assert state.upload(fake, "new.csv", b"a\n1\n")
    assert "4-new.csv" in state.files


def test_upload_failure_keeps_listing(state, fake):
    fake.fail.add("upload_file")
    before = list(state.files)

    assert state.upload(fake, "new.csv", b"a\n1\n") is False
    assert state.files == before


def test_deleting_selected_file_clears_selection(state, fake):
    state.select_file(fake, "1-report.csv")

    assert state.delete_file(fake, "1-report.csv")

    assert state.selected_identity is None
    assert state.dataset is None
    assert "1-report.csv" not in state.files


def test_delete_failure_keeps_state(state, fake):
    state.select_file(fake, "1-report.csv")
    fake.fail.add("delete_file")

    assert state.delete_file(fake, "1-report.csv") is False
    assert state.selected_identity == "1-report.csv"
    assert "1-report.csv" in state.files


def test_apply_events(state, fake):
    state.select_file(fake, "1-report.csv")
    del fake.files["1-report.csv"]
    refreshes = fake.calls.count("list_files")

    assert state.apply_events(fake, []) is False
    assert fake.calls.count("list_files") == refreshes

    assert state.apply_events(fake, [LifecycleMessage("deleted", "1-report.csv")])
    assert state.selected_identity is None
    assert state.files == ["2-empty.csv", "3-other.csv"]


def test_end_to_end_through_the_http_api(api_client, notifier):
    state = ExplorerState()
    subscription = notifier.subscribe()

    assert state.upload(api_client, "report.csv", b"a,b\n1,x\n2,y\n")
    [identity] = [f for f in state.files if f.endswith("report.csv")]

    assert state.select_file(api_client, identity)
    assert state.dataset.to_records() == [{"a": "1", "b": "x"}, {"a": "2", "b": "y"}]

    state.activate_column("a")
    assert state.sort_spec == SortSpec("a", True, True)
    assert [row["a"].raw for row in state.dataset.rows] == [1, 2]
    state.activate_column("a")
    assert [row["a"].raw for row in state.dataset.rows] == [2, 1]

    # Unknown identity: 404, previous dataset kept
    assert state.select_file(api_client, "1-nope.csv") is False
    assert "File not found" in state.last_error
    assert state.selected_identity == identity

    assert state.delete_file(api_client, identity)
    assert identity not in state.files
    assert api_client.list_files() == []

    kinds = []
    while not subscription.queue.empty():
        kinds.append(subscription.queue.get_nowait().kind)
    assert kinds == [LifecycleEventKind.UPLOADED, LifecycleEventKind.DELETED]


def test_select_file_with_integer_wider_than_a_float(api_client):
    state = ExplorerState()
    wide = "9" * 400
    assert state.upload(api_client, "wide.csv", f"a,b\n{wide},x\n1,y\n".encode())
    [identity] = state.files

    assert state.select_file(api_client, identity)
    assert state.last_error is None
    assert state.activate_column("a")
    assert state.dataset.to_records() == [{"a": "1", "b": "y"}, {"a": wide, "b": "x"}]
