"""
Collision-safe file operations: moves, repair renames and directory creation.

None of these operations ever replaces an existing file.
"""

import itertools
import os
import shutil
from pathlib import Path
from typing import Iterator, Optional

from .constants import get_logger
from .exceptions import RelocationError


class FileOperations:
    """Moves and renames files without overwriting anything."""

    def __init__(self):
        self.logger = get_logger("livepair.files")

    @staticmethod
    def is_free(path: Path) -> bool:
        """True if nothing (not even a dangling symlink) occupies ``path``."""
        return not os.path.lexists(path)

    @staticmethod
    def sibling_directories(base: Path) -> Iterator[Path]:
        """Yield ``base``, then ``base1``, ``base2``, ... next to it."""
        yield base
        for version in itertools.count(1):
            yield base.with_name(f"{base.name}{version}")

    def ensure_directory(self, directory: Path) -> None:
        """Create directory and parents if needed."""
        if directory.is_dir():
            return
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RelocationError(f"Cannot create directory {directory}: {e}") from e

    def safe_move(self, source: Path, base: Path) -> Optional[Path]:
        """Move ``source`` into ``base`` or the first sibling directory with a free slot.

        Returns the final path, or None when ``source`` no longer exists
        (already handled by an earlier step or a previous run).
        """
        if not source.exists():
            self.logger.debug(f"Skipping {source} - file no longer exists")
            return None

        for directory in self.sibling_directories(base):
            # A regular file squatting on the directory name counts as occupied
            if directory.exists() and not directory.is_dir():
                continue
            target = directory / source.name
            if self.is_free(target):
                self.ensure_directory(directory)
                return self.move_file(source, target)

    def move_file(self, source: Path, dest: Path) -> Path:
        """Move a single file to an exact destination path that must be free."""
        if not self.is_free(dest):
            raise RelocationError(f"Refusing to overwrite existing file: {dest}")

        try:
            shutil.move(str(source), str(dest))
        except OSError as e:
            raise RelocationError(f"Failed to move {source} -> {dest}: {e}") from e

        self.logger.info(f"{source} -> {dest}")
        return dest

    def rename_stem(self, source: Path, new_stem: str) -> Optional[Path]:
        """Rename a file in place to ``new_stem`` keeping its extension.

        Returns the new path, or None if the target name is taken or the
        rename fails. Failures are logged, never raised.
        """
        target = source.with_name(f"{new_stem}{source.suffix}")
        if not self.is_free(target):
            self.logger.warning(f"Cannot rename {source.name} -> {target.name}: target exists")
            return None

        try:
            source.rename(target)
        except OSError as e:
            self.logger.warning(f"Cannot rename {source.name} -> {target.name}: {e}")
            return None

        self.logger.info(f"{source} -> {target}")
        return target
