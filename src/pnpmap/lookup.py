"""Owner lookup: which package does a given file path belong to.

Rather than walking a trie, the finder queries the reverse index with path
prefixes whose lengths are those of recorded locations. Lengths are tried in
descending order of how many locations share them, since most packages of a
dependency tree sit at a handful of install depths.
"""

from __future__ import annotations

import os
from collections import Counter
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pnpmap.models.records import PackageLocator
    from pnpmap.store import LocatorIndex

_SEPARATORS = frozenset({"/", os.sep})


def length_frequencies(locations: Iterable[str]) -> Counter[int]:
    """Count how many locations share each string length."""
    return Counter(len(location) for location in locations)


def candidate_lengths(frequencies: Counter[int]) -> tuple[int, ...]:
    """Order lengths most frequent first; ties go to the longer length."""
    ordered = sorted(frequencies.items(), key=lambda item: (-item[1], -item[0]))
    return tuple(length for length, _count in ordered)


def _is_boundary(path: str, location: str) -> bool:
    length = len(location)
    if len(path) == length:
        return True
    return path[length] in _SEPARATORS or location[-1] in _SEPARATORS


def is_path_within(path: str, location: str) -> bool:
    """True when ``path`` is ``location`` itself or a file below it."""
    return bool(location) and path.startswith(location) and _is_boundary(path, location)


class PackageLocatorFinder:
    """Longest boundary-aligned prefix match over a LocatorIndex."""

    def __init__(self, index: LocatorIndex) -> None:
        self._index = index
        self._lengths = candidate_lengths(length_frequencies(index.locations()))
        self._max_length = max(self._lengths, default=0)

    @property
    def lengths(self) -> tuple[int, ...]:
        return self._lengths

    def find(self, path: str) -> PackageLocator | None:
        best: PackageLocator | None = None
        best_length = 0
        for length in self._lengths:
            if length <= best_length or length > len(path):
                continue
            prefix = path[:length]
            locator = self._index.get(prefix)
            if locator is None or not _is_boundary(path, prefix):
                continue
            best, best_length = locator, length
            if best_length == self._max_length:
                break
        return best
