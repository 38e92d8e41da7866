"""
Directory scanning and classification of capture files.
"""

from pathlib import Path
from typing import Iterable, List, Tuple

from .constants import (HEIC_EXTENSIONS, JPG_EXTENSIONS, MOVIE_EXTENSIONS, SIDECAR_PREFIX,
                        get_logger)
from .exceptions import ScanError
from .models import CaptureFile, CaptureKind, DirectorySnapshot

# (path, extension, modification time in nanoseconds)
FileEntry = Tuple[Path, str, int]


class FileIndexer:
    """Builds a stem-keyed snapshot of a flat directory."""

    def __init__(self, sidecar_prefix: str = SIDECAR_PREFIX):
        self.sidecar_prefix = sidecar_prefix
        self.logger = get_logger("livepair.indexer")

    @staticmethod
    def classify(path: Path, extension: str) -> CaptureKind:
        """Classify a file by its case-insensitive extension.

        Names without a usable stem or extension (``.heic``, ``IMG_1.``)
        are Unclassified.
        """
        ext = extension.lower()
        if ext and not ext.startswith("."):
            ext = f".{ext}"
        if len(ext) < 2 or not path.stem or path.stem == path.name:
            return CaptureKind.UNCLASSIFIED
        if ext in HEIC_EXTENSIONS:
            return CaptureKind.STILL_HEIC
        if ext in JPG_EXTENSIONS:
            return CaptureKind.STILL_JPEG
        if ext in MOVIE_EXTENSIONS:
            return CaptureKind.MOTION_MOV
        return CaptureKind.UNCLASSIFIED

    def list_entries(self, directory: Path) -> List[FileEntry]:
        """Enumerate the regular files of ``directory`` in name order."""
        try:
            paths = sorted(directory.iterdir())
        except OSError as e:
            raise ScanError(f"Cannot read directory {directory}: {e}") from e

        entries = []
        for path in paths:
            try:
                if not path.is_file():
                    continue
                entries.append((path, path.suffix, path.stat().st_mtime_ns))
            except OSError as e:
                raise ScanError(f"Cannot read metadata of {path}: {e}") from e
        return entries

    def scan(self, directory: Path) -> DirectorySnapshot:
        """Take a fresh snapshot of ``directory`` from the filesystem."""
        return self.index(directory, self.list_entries(directory))

    def index(self, directory: Path, entries: Iterable[FileEntry]) -> DirectorySnapshot:
        """Build a snapshot from externally supplied ``(path, extension, mtime_ns)`` entries."""
        snapshot = DirectorySnapshot(directory=directory)

        for path, extension, modified in entries:
            path = Path(path)
            snapshot.all_files.append(path)

            # Device sidecars are never matched, but still quarantined
            if path.name.startswith(self.sidecar_prefix):
                snapshot.sidecars.append(path)
                continue

            kind = self.classify(path, extension)
            mapping = snapshot.mapping_for(kind)
            if mapping is None:
                continue

            capture = CaptureFile(path=path, stem=path.stem, kind=kind, modified=modified)
            shadowed = mapping.get(capture.stem)
            if shadowed is not None:
                self.logger.debug(f"{path.name} shadows {shadowed.path.name} ({kind.value})")
            mapping[capture.stem] = capture

        self.logger.debug(
            f"Indexed {directory}: {len(snapshot.heic)} HEIC, {len(snapshot.jpeg)} JPEG, "
            f"{len(snapshot.mov)} MOV, {len(snapshot.all_files)} files total"
        )
        return snapshot
