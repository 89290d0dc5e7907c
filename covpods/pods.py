"""Group coverage meta-data and counter-data files into pods."""

from __future__ import annotations

import os
from typing import Iterable, List, Optional, Sequence

from .logging import get_logger, report_diagnostic
from .models import CounterFileEntry, MetaFileEntry, Pod
from .naming import COUNTER_FILE_PREFIX, META_FILE_PREFIX, CounterName, MetaName, classify_name
from .registry import PodRegistry
from .scanner import DirectoryScanner

_LOGGER = get_logger("pods")


def collect_pods(
    dirs: Sequence[str],
    track_origins: bool = False,
    *,
    warn: bool = False,
    meta_prefix: str = META_FILE_PREFIX,
    counter_prefix: str = COUNTER_FILE_PREFIX,
) -> List[Pod]:
    """Scan ``dirs`` in order and return the pods found across all of them.

    Pods are ordered by the first time their hash tag was seen on a meta
    file. Within a pod, counter files keep scan order (origin order, then
    byte-wise filename order). When ``track_origins`` is set each pod also
    carries the index into ``dirs`` of every counter file.

    Raises ``DirectoryUnreadable`` for the first directory that cannot be
    listed; nothing is returned in that case.
    """
    scanner = DirectoryScanner()
    registry = PodRegistry()
    for origin in scanner.iter_origins(dirs):
        for path in scanner.list_entries(origin):
            _register(
                registry,
                path,
                origin.index,
                meta_prefix=meta_prefix,
                counter_prefix=counter_prefix,
            )
    return finalize(registry, track_origins=track_origins, warn=warn)


def collect_pods_from_files(
    files: Iterable[str],
    *,
    warn: bool = False,
    meta_prefix: str = META_FILE_PREFIX,
    counter_prefix: str = COUNTER_FILE_PREFIX,
) -> List[Pod]:
    """Group an explicit list of file paths into pods, in the order given.

    No directories are listed and no sorting is applied, so the caller's
    order decides pod and counter order. Pods carry no origins.
    """
    registry = PodRegistry()
    for path in files:
        _register(
            registry,
            path,
            None,
            meta_prefix=meta_prefix,
            counter_prefix=counter_prefix,
        )
    return finalize(registry, track_origins=False, warn=warn)


def finalize(registry: PodRegistry, *, track_origins: bool, warn: bool = False) -> List[Pod]:
    """Resolve pending counters against meta slots and emit pods in slot order."""
    pods: List[Pod] = []
    for hash_tag, meta_path in registry.slots():
        counters = registry.pending_for(hash_tag)
        pods.append(
            Pod(
                meta_file=meta_path,
                counter_data_files=[counter.path for counter in counters],
                origins=[counter.origin for counter in counters] if track_origins else None,
                process_ids=[counter.pid for counter in counters],
            )
        )

    for orphan in registry.orphans():
        report_diagnostic("Skipping orphaned counter file: %s", orphan.path, warn=warn)
    if not pods:
        report_diagnostic("No coverage meta-data files found", warn=warn)
    return pods


def _register(
    registry: PodRegistry,
    path: str,
    origin: Optional[int],
    *,
    meta_prefix: str,
    counter_prefix: str,
) -> None:
    name = os.path.basename(path)
    parsed = classify_name(name, meta_prefix=meta_prefix, counter_prefix=counter_prefix)
    if isinstance(parsed, MetaName):
        added = registry.add_meta(MetaFileEntry(hash_tag=parsed.hash_tag, path=path))
        if not added:
            _LOGGER.debug("Duplicate meta-data file ignored: %s", path)
    elif isinstance(parsed, CounterName):
        registry.add_counter(
            CounterFileEntry(
                hash_tag=parsed.hash_tag,
                pid=parsed.pid,
                sequence=parsed.sequence,
                path=path,
                origin=origin,
            )
        )
    else:
        _LOGGER.debug("Ignoring unrecognized file: %s", path)


__all__ = ["collect_pods", "collect_pods_from_files", "finalize"]
