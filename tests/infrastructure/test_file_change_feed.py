"""Tests for the polling ChangeFeed over a JSON file."""

import os
from datetime import datetime

from structlog.testing import capture_logs

from pos.infrastructure.persistence.file_change_feed import FileChangeFeed
from pos.infrastructure.persistence.json_transaction_repository import JsonTransactionRepository
from tests.builders import make_transaction


def test_first_snapshot_is_immediate(tmp_path):
    repo = JsonTransactionRepository(tmp_path / "transactions.json")
    repo.save(make_transaction(datetime(2026, 3, 11, 12, 0), txn_id="t1"))

    def sleep(_):
        raise AssertionError("should not wait for the first snapshot")

    feed = repo.change_feed("r1", max_snapshots=1, sleep=sleep)
    snapshots = list(feed)
    assert [[t.id for t in snap] for snap in snapshots] == [["t1"]]


def test_new_snapshot_after_write(tmp_path):
    path = tmp_path / "transactions.json"
    repo = JsonTransactionRepository(path)
    waits = []

    def sleep(seconds):
        waits.append(seconds)
        if len(waits) == 2:
            repo.save(make_transaction(datetime(2026, 3, 11, 12, 0), txn_id="t1"))
            stat = path.stat()
            os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

    feed = repo.change_feed("r1", poll_interval=0.5, max_snapshots=2, sleep=sleep)
    snapshots = list(feed)

    assert [len(snap) for snap in snapshots] == [0, 1]
    assert waits == [0.5, 0.5]


def test_feed_restarts_from_current_state(tmp_path):
    path = tmp_path / "items.json"
    path.write_text("[]")
    state = {"items": ["a"]}
    feed = FileChangeFeed(path, lambda: list(state["items"]), max_snapshots=1)

    assert list(feed) == [["a"]]
    state["items"].append("b")
    assert list(feed) == [["a", "b"]]


def test_half_written_file_is_retried(tmp_path):
    path = tmp_path / "transactions.json"
    repo = JsonTransactionRepository(path)
    path.write_text('[{"id": "t0", ', encoding="utf-8")
    waits = []

    def sleep(seconds):
        waits.append(seconds)
        path.write_text("[]", encoding="utf-8")
        repo.save(make_transaction(datetime(2026, 3, 11, 12, 0), txn_id="t1"))

    with capture_logs() as logs:
        snapshots = list(repo.change_feed("r1", max_snapshots=1, sleep=sleep))

    assert [[t.id for t in snap] for snap in snapshots] == [["t1"]]
    assert len(waits) == 1
    assert [e["event"] for e in logs if e["log_level"] == "warning"] == ["snapshot_unreadable"]
