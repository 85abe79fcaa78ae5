"""Patch entries and ordered patch sets."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


def _as_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    values = list(data)
    for v in values:
        if not isinstance(v, int) or not 0 <= v <= 0xFF:
            raise ValueError(f"Byte value out of range: {v!r}")
    return bytes(values)


@dataclass(frozen=True)
class PatchEntry:
    """Overwrite ``len(data)`` bytes starting at ``offset``."""

    offset: int
    data: bytes
    label: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.offset, int) or isinstance(self.offset, bool):
            raise ValueError(f"Offset must be an integer, got {self.offset!r}")
        if self.offset < 0:
            raise ValueError(f"Negative offset: {self.offset}")
        data = _as_bytes(self.data)
        if not data:
            raise ValueError(f"Empty patch data at offset {self.offset:#x}")
        object.__setattr__(self, "data", data)

    @classmethod
    def byte(cls, offset: int, value: int, label: str = "") -> PatchEntry:
        return cls(offset, [value], label)

    @classmethod
    def repeat(cls, offset: int, value: int, count: int, label: str = "") -> PatchEntry:
        if count < 1:
            raise ValueError(f"Repeat count must be >= 1, got {count}")
        return cls(offset, [value] * count, label)

    @property
    def end(self) -> int:
        return self.offset + len(self.data)

    def __len__(self) -> int:
        return len(self.data)


class PatchSet:
    """Ordered collection of PatchEntry.

    Entries are applied in insertion order. Overlap is legal; for
    overlapping bytes the later entry wins.
    """

    def __init__(self, entries: Iterable[PatchEntry] = ()):
        self._entries: list[PatchEntry] = []
        self.extend(entries)

    def append(self, entry: PatchEntry) -> None:
        if not isinstance(entry, PatchEntry):
            raise TypeError(f"Expected PatchEntry, got {type(entry).__name__}")
        self._entries.append(entry)

    def extend(self, entries: Iterable[PatchEntry]) -> None:
        for e in entries:
            self.append(e)

    def __iter__(self) -> Iterator[PatchEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, idx: int) -> PatchEntry:
        return self._entries[idx]

    def __eq__(self, other) -> bool:
        if not isinstance(other, PatchSet):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"PatchSet({len(self._entries)} entries)"

    def max_end(self) -> int:
        """Highest byte position (exclusive) touched by any entry, 0 if empty."""
        return max((e.end for e in self._entries), default=0)

    def overlaps(self) -> list[tuple[int, int]]:
        """Index pairs of entries whose byte ranges intersect."""
        pairs = []
        for i, a in enumerate(self._entries):
            for j in range(i + 1, len(self._entries)):
                b = self._entries[j]
                if a.offset < b.end and b.offset < a.end:
                    pairs.append((i, j))
        return pairs
