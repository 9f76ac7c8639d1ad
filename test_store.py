"""
Tests for the log file store.
"""
import os
import time
from datetime import datetime, timedelta

import pytest

from logdog.core.log_store import LogStore


@pytest.fixture
def store():
    return LogStore()


def _age(path, days):
    """Set a file's modification time to `days` days ago."""
    stamp = time.time() - days * 86400
    os.utime(path, (stamp, stamp))


def test_list_logs_missing_directory(store, tmp_path):
    assert store.list_logs(tmp_path / "nope") == []
    assert store.list_logs(tmp_path / "nope", recursive=True) == []


def test_list_logs_flat_and_sorted(store, tmp_path):
    for name in ("logdog-2024-01-03.json", "logdog-2024-01-01.json", "notes.txt"):
        (tmp_path / name).write_text("{}\n")
    nested = tmp_path / "sub"
    nested.mkdir()
    (nested / "logdog-2024-01-02.json").write_text("{}\n")

    assert [os.path.basename(p) for p in store.list_logs(tmp_path)] == [
        "logdog-2024-01-01.json",
        "logdog-2024-01-03.json",
    ]


def test_list_logs_recursive(store, tmp_path):
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    (nested / "deep.json").write_text("{}\n")
    (tmp_path / "top.json").write_text("{}\n")

    logs = store.list_logs(tmp_path, recursive=True)
    assert logs == sorted([str(nested / "deep.json"), str(tmp_path / "top.json")])


def test_list_projects(store, tmp_path):
    (tmp_path / "beta").mkdir()
    (tmp_path / "alpha").mkdir()
    (tmp_path / "stray.json").write_text("")

    assert store.list_projects(tmp_path) == ["alpha", "beta"]
    assert store.list_projects(tmp_path / "missing") == []


def test_list_projects_skips_hidden_directories(store, tmp_path):
    (tmp_path / "logdog").mkdir()
    (tmp_path / ".logdog").mkdir()
    (tmp_path / ".logdog" / "logdog-2024-01-01.json").write_text("{}\n")

    assert store.list_projects(tmp_path) == ["logdog"]


def test_count_entries_skips_blank_lines(store, tmp_path):
    log = tmp_path / "log.json"
    log.write_text('{"message": "a"}\n\n   \n{"message": "b"}\nraw\n')
    assert store.count_entries(log) == 3


def test_count_entries_missing_file_is_zero(store, tmp_path):
    assert store.count_entries(tmp_path / "missing.json") == 0


def test_read_lines(store, tmp_path):
    log = tmp_path / "log.json"
    log.write_text('  first  \n\nsecond\n')
    assert store.read_lines(log) == ["first", "second"]

    with pytest.raises(OSError):
        store.read_lines(tmp_path / "missing.json")


def test_remove_surfaces_errors(store, tmp_path):
    log = tmp_path / "log.json"
    log.write_text("{}\n")
    store.remove(log)
    assert not log.exists()

    with pytest.raises(OSError):
        store.remove(log)


def test_mod_time_before_fails_safe(store, tmp_path):
    log = tmp_path / "log.json"
    log.write_text("{}\n")
    _age(log, 3)

    assert store.mod_time_before(log, datetime.now() - timedelta(days=1))
    assert not store.mod_time_before(log, datetime.now() - timedelta(days=5))
    assert not store.mod_time_before(tmp_path / "missing.json", datetime.now())


def test_select_old_logs_uses_retention(store, tmp_path):
    """Files 10 and 30 days old are past a 7 day retention, a 1 day old one is not."""
    paths = {}
    for days in (1, 10, 30):
        path = tmp_path / f"log-{days}.json"
        path.write_text("{}\n")
        _age(path, days)
        paths[days] = str(path)

    selected = store.select_old_logs([paths[1], paths[10], paths[30]], 7)
    assert selected == [paths[10], paths[30]]


def test_clear_old_logs_continues_after_failures(store, tmp_path, monkeypatch):
    paths = []
    for name in ("a.json", "b.json", "c.json"):
        path = tmp_path / name
        path.write_text("{}\n")
        _age(path, 20)
        paths.append(str(path))

    real_remove = store.remove

    def flaky_remove(path):
        if path.endswith("b.json"):
            raise PermissionError(13, "Permission denied", path)
        real_remove(path)

    monkeypatch.setattr(store, "remove", flaky_remove)

    deleted, errors = store.clear_old_logs(paths, 7)
    assert deleted == 2
    assert len(errors) == 1
    assert errors[0].startswith("Failed to delete b.json:")
    assert os.path.exists(paths[1])
    assert not os.path.exists(paths[0]) and not os.path.exists(paths[2])
