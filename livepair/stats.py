"""
Statistics tracking for Live Photo repair runs.
"""

import itertools
from pathlib import Path
from typing import Dict, Iterator

from .constants import FIRST_VERSION, VERSIONED_SUFFIX
from .file_operations import FileOperations


class StatsManager:
    """Encapsulates statistics tracking for a single run."""

    def __init__(self):
        self._stats = {
            'exact_pairs': 0,
            'fuzzy_repairs': 0,
            'unmatched_motion': 0,
            'quarantined': 0,
            'distributed_pairs': 0,
        }

    def record_matching(self, exact: int, repaired: int, unmatched: int) -> None:
        """Record the outcome of the matching pass."""
        self._stats['exact_pairs'] += exact
        self._stats['fuzzy_repairs'] += repaired
        self._stats['unmatched_motion'] += unmatched

    def increment_quarantined(self, count: int = 1) -> None:
        self._stats['quarantined'] += count

    def increment_distributed(self, count: int = 1) -> None:
        self._stats['distributed_pairs'] += count

    def get_stats(self) -> Dict[str, int]:
        """Get a copy of current statistics."""
        return self._stats.copy()

    def get_kept_pairs(self) -> int:
        return self._stats['exact_pairs'] + self._stats['fuzzy_repairs']

    # Individual stat getters for reporting
    def get_exact_pairs(self) -> int:
        return self._stats['exact_pairs']

    def get_fuzzy_repairs(self) -> int:
        return self._stats['fuzzy_repairs']

    def get_unmatched_motion(self) -> int:
        return self._stats['unmatched_motion']

    def get_quarantined(self) -> int:
        return self._stats['quarantined']

    def get_distributed_pairs(self) -> int:
        return self._stats['distributed_pairs']


def _existing_dirs(candidates: Iterator[Path]) -> Iterator[Path]:
    for directory in candidates:
        if not directory.is_dir():
            return
        yield directory


def _count_files(directory: Path) -> int:
    return sum(1 for entry in directory.iterdir() if entry.is_file())


def versioned_dirs(dest_root: Path, first_version: int = FIRST_VERSION) -> Iterator[Path]:
    """``100APPLE``, ``101APPLE``, ... up to the first one that does not exist."""
    return _existing_dirs(dest_root / f"{version}{VERSIONED_SUFFIX}"
                          for version in itertools.count(first_version))


def quarantine_dirs(quarantine_dir: Path) -> Iterator[Path]:
    """``Other``, ``Other1``, ... up to the first one that does not exist."""
    return _existing_dirs(FileOperations.sibling_directories(quarantine_dir))


def count_versioned_files(dest_root: Path, first_version: int = FIRST_VERSION) -> int:
    return sum(_count_files(d) for d in versioned_dirs(dest_root, first_version))


def count_quarantined_files(quarantine_dir: Path) -> int:
    return sum(_count_files(d) for d in quarantine_dirs(quarantine_dir))
