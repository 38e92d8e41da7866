"""
Distribution of repaired Live Photo pairs into versioned directories.
"""

import itertools
from pathlib import Path
from typing import List, Optional

from .constants import (CANONICAL_MOVIE_EXTENSION, CAPTURE_PREFIX, FIRST_VERSION, PREFIX_LENGTH,
                        VERSIONED_SUFFIX, get_logger)
from .exceptions import RelocationError
from .file_operations import FileOperations
from .indexer import FileIndexer
from .models import CaptureFile, DirectorySnapshot, DistributedPair


class Distributor:
    """Moves each long-stem pair to ``<N>APPLE/<prefix>.*`` in the first free version."""

    def __init__(self, dest_root: Path, file_ops: FileOperations, indexer: FileIndexer,
                 first_version: int = FIRST_VERSION):
        self.dest_root = dest_root
        self.file_ops = file_ops
        self.indexer = indexer
        self.first_version = first_version
        self.logger = get_logger("livepair.distributor")

    def versioned_dir(self, version: int) -> Path:
        return self.dest_root / f"{version}{VERSIONED_SUFFIX}"

    def run(self, directory: Path) -> List[DistributedPair]:
        """Re-scan ``directory`` and distribute every pair with a repaired stem."""
        snapshot = self.indexer.scan(directory)
        distributed = []

        for stem in sorted(snapshot.mov):
            motion = snapshot.mov[stem]
            if not self.needs_distribution(stem):
                continue

            still = self.find_still(snapshot, stem)
            if still is None:
                self.logger.debug(f"No sibling still for {motion.path.name}, leaving in place")
                continue

            pair = self.distribute(motion, still)
            if pair is not None:
                distributed.append(pair)

        self.logger.info(f"Distributed {len(distributed)} pairs")
        return distributed

    @staticmethod
    def needs_distribution(stem: str) -> bool:
        return stem.startswith(CAPTURE_PREFIX) and len(stem) > PREFIX_LENGTH

    @staticmethod
    def find_still(snapshot: DirectorySnapshot, stem: str) -> Optional[CaptureFile]:
        """Sibling still with the exact same stem, HEIC preferred."""
        return snapshot.heic.get(stem) or snapshot.jpeg.get(stem)

    def distribute(self, motion: CaptureFile, still: CaptureFile) -> Optional[DistributedPair]:
        prefix = motion.stem[:PREFIX_LENGTH]
        motion_name = f"{prefix}{CANONICAL_MOVIE_EXTENSION}"
        still_name = f"{prefix}{still.path.suffix}"

        target_dir = self.find_free_slot(motion_name, still_name)
        self.file_ops.ensure_directory(target_dir)

        try:
            motion_dest = self.file_ops.move_file(motion.path, target_dir / motion_name)
        except RelocationError as e:
            self.logger.warning(f"Skipping pair {motion.path.name}: {e}")
            return None

        try:
            still_dest = self.file_ops.move_file(still.path, target_dir / still_name)
        except RelocationError as e:
            # The motion file has already moved; the pair is now split
            self.logger.error(f"Pair split: {motion_dest} moved but {still.path} did not")
            raise RelocationError(f"Split pair {motion_dest} / {still.path}: {e}") from e

        return DistributedPair(motion_source=motion.path, still_source=still.path,
                               motion_dest=motion_dest, still_dest=still_dest)

    def find_free_slot(self, motion_name: str, still_name: str) -> Path:
        """First versioned directory holding neither target name (case-insensitive)."""
        wanted = {motion_name.lower(), still_name.lower()}
        for version in itertools.count(self.first_version):
            directory = self.versioned_dir(version)
            if not directory.exists():
                return directory
            if not directory.is_dir():
                continue
            present = {entry.name.lower() for entry in directory.iterdir()}
            if not wanted & present:
                return directory
