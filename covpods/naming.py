"""Filename grammars for coverage meta-data and counter-data files."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass

META_FILE_PREFIX = "covmeta"
COUNTER_FILE_PREFIX = "covcounters"

_HASH_PATTERN = r"[0-9a-f]{32}"
_DECIMAL_PATTERN = r"[0-9]+"


@dataclass(frozen=True)
class MetaName:
    """Parsed meta-data filename."""

    hash_tag: str


@dataclass(frozen=True)
class CounterName:
    """Parsed counter-data filename."""

    hash_tag: str
    pid: int
    sequence: int


def _meta_regex(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(prefix)}\.({_HASH_PATTERN})")


def _counter_regex(prefix: str) -> re.Pattern[str]:
    return re.compile(
        rf"{re.escape(prefix)}\.({_HASH_PATTERN})\.({_DECIMAL_PATTERN})\.({_DECIMAL_PATTERN})"
    )


def classify_name(
    name: str,
    *,
    meta_prefix: str = META_FILE_PREFIX,
    counter_prefix: str = COUNTER_FILE_PREFIX,
) -> MetaName | CounterName | None:
    """Classify a bare filename as a meta file, a counter file, or neither.

    Only exact matches count: a wrong prefix, an uppercase or short hash, a
    non-numeric pid/sequence, or trailing fields all yield ``None``.
    """
    match = _meta_regex(meta_prefix).fullmatch(name)
    if match:
        return MetaName(hash_tag=match.group(1))

    match = _counter_regex(counter_prefix).fullmatch(name)
    if match:
        return CounterName(
            hash_tag=match.group(1),
            pid=int(match.group(2)),
            sequence=int(match.group(3)),
        )
    return None


def hash_tag_for(data: bytes) -> str:
    """Return the hash tag a writer derives from ``data``."""
    return hashlib.md5(data).hexdigest()


def meta_file_name(hash_tag: str, *, prefix: str = META_FILE_PREFIX) -> str:
    return f"{prefix}.{hash_tag}"


def counter_file_name(
    hash_tag: str, pid: int, sequence: int, *, prefix: str = COUNTER_FILE_PREFIX
) -> str:
    return f"{prefix}.{hash_tag}.{pid}.{sequence}"


__all__ = [
    "COUNTER_FILE_PREFIX",
    "META_FILE_PREFIX",
    "CounterName",
    "MetaName",
    "classify_name",
    "counter_file_name",
    "hash_tag_for",
    "meta_file_name",
]
