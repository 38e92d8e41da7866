"""
Quarantine of files that did not end up in a Live Photo pair.
"""

from pathlib import Path
from typing import List

from .constants import get_logger
from .file_operations import FileOperations
from .models import DirectorySnapshot, MatchResult


class Quarantine:
    """Moves every unkept file of a pre-match snapshot into the quarantine directory."""

    def __init__(self, quarantine_dir: Path, file_ops: FileOperations):
        self.quarantine_dir = quarantine_dir
        self.file_ops = file_ops
        self.logger = get_logger("livepair.quarantine")

    def run(self, snapshot: DirectorySnapshot, result: MatchResult) -> List[Path]:
        """Quarantine unkept files; return their new locations."""
        moved = []
        for original in snapshot.all_files:
            current = result.current_path(original)
            if current in result.kept:
                continue

            dest = self.file_ops.safe_move(current, self.quarantine_dir)
            if dest is not None:
                moved.append(dest)

        if moved:
            self.logger.info(f"Quarantined {len(moved)} files under {self.quarantine_dir}")
        return moved
