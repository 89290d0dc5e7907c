"""Accumulates meta slots and pending counter observations for one collection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .models import CounterFileEntry, MetaFileEntry


@dataclass
class PendingCounter:
    """A counter file recorded against a hash tag, in scan order."""

    path: str
    origin: Optional[int]
    pid: int


class PodRegistry:
    """Tracks first-seen meta files and every counter file by hash tag.

    Slots are created only by meta files and keep their creation order. Counter
    files are recorded whether or not a slot exists yet, so a counter seen
    before its meta file (which may live in a later origin) is kept until
    the registry is finalized.
    """

    def __init__(self) -> None:
        self._slots: Dict[str, str] = {}
        self._pending: Dict[str, List[PendingCounter]] = {}

    def add_meta(self, entry: MetaFileEntry) -> bool:
        """Register ``entry``; return False when its hash already has a slot."""
        if entry.hash_tag in self._slots:
            return False
        self._slots[entry.hash_tag] = entry.path
        return True

    def add_counter(self, entry: CounterFileEntry) -> None:
        self._pending.setdefault(entry.hash_tag, []).append(
            PendingCounter(path=entry.path, origin=entry.origin, pid=entry.pid)
        )

    def slots(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(hash_tag, meta_path)`` in slot creation order."""
        yield from self._slots.items()

    def pending_for(self, hash_tag: str) -> List[PendingCounter]:
        return list(self._pending.get(hash_tag, ()))

    def orphans(self) -> List[PendingCounter]:
        """Return counters whose hash tag never gained a slot, grouped by hash tag."""
        return [
            counter
            for hash_tag, counters in self._pending.items()
            if hash_tag not in self._slots
            for counter in counters
        ]


__all__ = ["PendingCounter", "PodRegistry"]
