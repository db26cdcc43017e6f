"""ChangeFeed: a stream of full-collection snapshots.

The hosted store pushes the whole collection every time it changes.
Consumers iterate the feed and hand each snapshot to pure functions such
as ``aggregate``; nothing in the domain ever holds onto the feed itself.
Iterating a feed again starts a fresh stream beginning with the current
state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class ChangeFeed(ABC, Generic[T]):

    @abstractmethod
    def snapshots(self) -> Iterator[list[T]]:
        """Yield the current collection, then again after every change."""

    def __iter__(self) -> Iterator[list[T]]:
        return self.snapshots()
