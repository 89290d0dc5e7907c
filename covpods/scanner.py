"""Ordered listing of coverage output directories."""

from __future__ import annotations

import os
from typing import Iterator, List, Sequence

from .logging import get_logger
from .models import OriginDirectory

_LOGGER = get_logger("scanner")


class CollectionError(Exception):
    """Base class for failures that abort pod collection."""


class DirectoryUnreadable(CollectionError):
    """Raised when an origin directory cannot be opened or listed."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot read coverage directory: {path}")
        self.path = path


def _sort_key(name: str) -> bytes:
    return os.fsencode(name)


class DirectoryScanner:
    """Lists origin directories in caller order, entries in byte-wise name order."""

    def iter_origins(self, paths: Sequence[str]) -> Iterator[OriginDirectory]:
        for index, path in enumerate(paths):
            yield OriginDirectory(path=path, index=index)

    def list_entries(self, origin: OriginDirectory) -> List[str]:
        """Return absolute paths of the non-directory entries of ``origin``."""
        names: List[str] = []
        try:
            with os.scandir(origin.path) as entries:
                for entry in entries:
                    if entry.is_dir():
                        continue
                    names.append(entry.name)
        except OSError as exc:
            raise DirectoryUnreadable(origin.path) from exc

        root = os.path.abspath(origin.path)
        names.sort(key=_sort_key)
        _LOGGER.debug("Listed %d entries in origin %d (%s)", len(names), origin.index, root)
        return [os.path.join(root, name) for name in names]


__all__ = ["CollectionError", "DirectoryScanner", "DirectoryUnreadable"]
