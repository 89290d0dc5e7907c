"""Core data models shared across covpods components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class OriginDirectory:
    """An input directory and its position in the caller's list."""

    path: str
    index: int


@dataclass
class MetaFileEntry:
    """A meta-data file found during a scan."""

    hash_tag: str
    path: str


@dataclass
class CounterFileEntry:
    """A counter-data file found during a scan."""

    hash_tag: str
    pid: int
    sequence: int
    path: str
    origin: Optional[int] = None


@dataclass
class Pod:
    """A meta-data file grouped with the counter-data files written against it."""

    meta_file: str
    counter_data_files: List[str] = field(default_factory=list)
    origins: Optional[List[int]] = None
    process_ids: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "meta_file": self.meta_file,
            "counter_data_files": list(self.counter_data_files),
            "process_ids": list(self.process_ids),
        }
        if self.origins is not None:
            payload["origins"] = list(self.origins)
        return payload
