"""
Tests for the identity display helpers used by the file list.
"""

from datetime import datetime

from frontend.helpers.file_identity import get_file_name, get_time_string, get_upload_time


def test_file_name_strips_only_the_timestamp_prefix():
    assert get_file_name("1730219014839-sales-2024.csv") == "sales-2024.csv"


def test_name_without_timestamp_is_shown_as_is():
    assert get_file_name("notes.csv") == "notes.csv"
    assert get_upload_time("notes.csv") is None
    assert get_time_string("notes.csv") == "-"


def test_upload_time_is_local_time_of_the_prefix():
    expected = datetime.fromtimestamp(1730219014.839)

    assert get_upload_time("1730219014839-report.csv") == expected
    assert get_time_string("1730219014839-report.csv") == expected.strftime("%Y-%m-%d %H:%M:%S")
