"""ChangeFeed over a JSON file, driven by polling its modification time."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Callable, Iterator, TypeVar

import structlog

from pos.domain.repository.change_feed import ChangeFeed

logger = structlog.get_logger()

T = TypeVar("T")


class FileChangeFeed(ChangeFeed[T]):
    """Yields ``load()`` once up front and again whenever the file changes.

    A file that does not decode is not a snapshot: the feed logs it and
    tries again on the next poll.  ``max_snapshots`` bounds an otherwise
    endless stream.
    """

    def __init__(
        self,
        file_path: Path,
        load: Callable[[], list[T]],
        poll_interval: float = 1.0,
        max_snapshots: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._file_path = file_path
        self._load = load
        self._poll_interval = poll_interval
        self._max_snapshots = max_snapshots
        self._sleep = sleep

    def snapshots(self) -> Iterator[list[T]]:
        last_seen: int | None = None
        produced = 0
        while self._max_snapshots is None or produced < self._max_snapshots:
            stamp = self._stamp()
            if produced == 0 or stamp != last_seen:
                try:
                    snapshot = self._load()
                except json.JSONDecodeError as exc:
                    logger.warning(
                        "snapshot_unreadable", path=str(self._file_path), error=str(exc)
                    )
                else:
                    last_seen = stamp
                    produced += 1
                    yield snapshot
                    continue
            self._sleep(self._poll_interval)

    def _stamp(self) -> int | None:
        try:
            return self._file_path.stat().st_mtime_ns
        except FileNotFoundError:
            return None
