"""Resolution results and per-session resolution state."""
from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple


@dataclass(frozen=True)
class Hit:
    """A root that supplies a relative path.

    ``absolute_path`` doubles as the resumption token for the next lookup.
    """

    absolute_path: str
    root_index: int
    relative_path: str
    root: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "absolute_path": self.absolute_path,
            "root_index": self.root_index,
            "relative_path": self.relative_path,
            "root": self.root,
        }


# (supplying root, relative path)
RecordEntry = Tuple[str, str]


class ResolutionRecord(MutableMapping):
    """Absolute path → (supplying root, relative path) for one session.

    Entries are added for every hit and are never removed while the session
    lives; ``clear()`` discards the whole record when the session ends.
    """

    def __init__(self, entries: Optional[Dict[str, RecordEntry]] = None) -> None:
        self._entries: Dict[str, RecordEntry] = dict(entries or {})

    def __getitem__(self, key: str) -> RecordEntry:
        return self._entries[key]

    def __setitem__(self, key: str, value: RecordEntry) -> None:
        root, relative = value
        self._entries[key] = (root, relative)

    def __delitem__(self, key: str) -> None:
        raise TypeError("ResolutionRecord entries cannot be removed during a session")

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, hit: Hit) -> None:
        self[hit.absolute_path] = (hit.root, hit.relative_path)

    def clear(self) -> None:
        self._entries.clear()

    def __repr__(self) -> str:
        return f"ResolutionRecord({self._entries!r})"


__all__ = ["Hit", "RecordEntry", "ResolutionRecord"]
