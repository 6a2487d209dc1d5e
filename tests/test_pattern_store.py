"""Unit tests for PatternStore."""

import os
import sys
from unittest.mock import patch

import pytest

from gitsparse.exceptions import PatternFileError
from gitsparse.pattern_store import PatternStore, read_pattern_text, split_lines


@pytest.fixture
def store(tmp_path):
    return PatternStore(tmp_path / "info" / "sparse-checkout")


def test_missing_file_lists_empty(store):
    assert not store.exists()
    assert store.list() == []
    assert read_pattern_text(store.path) is None


@pytest.mark.parametrize(
    "patterns",
    [
        ["/*", "!/*/"],
        ["docs/", "*.md", "!drafts/*.md", "path with spaces/"],
        ["only-one"],
    ],
)
def test_set_then_list_round_trips(store, patterns):
    store.set(patterns)
    assert store.list() == patterns


def test_set_writes_bare_lf_lines(store):
    store.set(["/*", "!/*/"])
    assert store.path.read_bytes() == b"/*\n!/*/\n"


def test_set_empty_sequence_truncates(store):
    store.set(["/*"])
    store.set([])
    assert store.path.read_bytes() == b""
    assert store.list() == []


def test_set_overwrites_previous_contents(store):
    store.set(["a", "b", "c"])
    store.set(["d"])
    assert store.list() == ["d"]


def test_list_normalizes_line_endings(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_bytes(b"/*\r\n!/*/\rdocs/\n\n\r\n")
    assert store.list() == ["/*", "!/*/", "docs/"]


def test_add_appends_without_dedup(store):
    store.set(["/*", "!/*/"])
    store.add(["docs/", "/*"])
    assert store.list() == ["/*", "!/*/", "docs/", "/*"]


def test_add_to_missing_file(store):
    store.add(["docs/"])
    assert store.list() == ["docs/"]


def test_create_reports_existing_file(store):
    assert store.create() is False
    assert store.exists()
    assert store.path.read_text() == ""
    store.set(["/*"])
    assert store.create() is True
    assert store.list() == ["/*"]


def test_split_lines():
    assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]


@pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="permissions are not enforced")
def test_unreadable_file_raises(store):
    store.set(["/*"])
    store.path.chmod(0)
    try:
        with pytest.raises(PatternFileError) as excinfo:
            store.list()
        assert excinfo.value.path == str(store.path)
    finally:
        store.path.chmod(0o644)


def test_write_failure_raises(tmp_path):
    blocker = tmp_path / "info"
    blocker.write_text("not a directory")
    store = PatternStore(blocker / "sparse-checkout")
    with pytest.raises(PatternFileError):
        store.set(["/*"])
    with pytest.raises(PatternFileError):
        store.create()


def test_directory_in_place_of_file_raises(tmp_path):
    (tmp_path / "sparse-checkout").mkdir()
    store = PatternStore(tmp_path / "sparse-checkout")
    with pytest.raises(PatternFileError):
        store.list()
    with pytest.raises(PatternFileError):
        store.set(["/*"])


def test_invalid_utf8_raises(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_bytes(b"\xff\xfe/*\n")
    with pytest.raises(PatternFileError):
        store.list()


def test_permission_error_on_read_raises(store):
    store.set(["/*"])
    with patch("builtins.open", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(PatternFileError) as excinfo:
            store.list()
    assert excinfo.value.path == str(store.path)
    assert "Permission denied" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, PermissionError)


def test_permission_error_on_write_raises(store):
    with patch("builtins.open", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(PatternFileError):
            store.set(["/*"])
