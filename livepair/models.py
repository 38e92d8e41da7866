"""
Data model for capture files, pairing results and repairs.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set


class CaptureKind(Enum):
    """Classification of a file by extension."""
    STILL_HEIC = "heic"
    STILL_JPEG = "jpeg"
    MOTION_MOV = "mov"
    UNCLASSIFIED = "unclassified"


class MatchKind(Enum):
    """How a motion file was paired with its still."""
    EXACT_HEIC = "exact-heic"
    EXACT_JPEG = "exact-jpeg"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class CaptureFile:
    """One file from a directory snapshot.

    ``modified`` is the modification time in integer nanoseconds so that
    equality comparisons between a still and its motion file are exact.
    """
    path: Path
    stem: str
    kind: CaptureKind
    modified: int

    def renamed(self, new_path: Path) -> "CaptureFile":
        """Return the record that supersedes this one after a rename."""
        return CaptureFile(path=new_path, stem=new_path.stem, kind=self.kind,
                           modified=self.modified)


@dataclass
class DirectorySnapshot:
    """Result of a single scan: per-kind mappings keyed by stem plus every file seen."""
    directory: Path
    heic: Dict[str, CaptureFile] = field(default_factory=dict)
    jpeg: Dict[str, CaptureFile] = field(default_factory=dict)
    mov: Dict[str, CaptureFile] = field(default_factory=dict)
    all_files: List[Path] = field(default_factory=list)
    sidecars: List[Path] = field(default_factory=list)

    def mapping_for(self, kind: CaptureKind) -> Optional[Dict[str, CaptureFile]]:
        return {
            CaptureKind.STILL_HEIC: self.heic,
            CaptureKind.STILL_JPEG: self.jpeg,
            CaptureKind.MOTION_MOV: self.mov,
        }.get(kind)

    def stills(self) -> List[CaptureFile]:
        """All indexed stills, HEIC before JPEG, each group in stem order."""
        return ([self.heic[stem] for stem in sorted(self.heic)] +
                [self.jpeg[stem] for stem in sorted(self.jpeg)])


@dataclass(frozen=True)
class PairCandidate:
    motion: CaptureFile
    still: CaptureFile
    match_kind: MatchKind


@dataclass(frozen=True)
class RepairRecord:
    """Before/after paths of both members of a fuzzy-matched pair."""
    original_motion: Path
    original_still: Path
    repaired_motion: Path
    repaired_still: Path


@dataclass
class MatchResult:
    """Outcome of one matching pass.

    ``kept`` holds exact final paths: a file renamed during repair is
    tracked by its new path only. ``renamed`` maps each renamed file's
    original path to its current one.
    """
    kept: Set[Path] = field(default_factory=set)
    processed_stills: Set[Path] = field(default_factory=set)
    pairs: List[PairCandidate] = field(default_factory=list)
    repairs: List[RepairRecord] = field(default_factory=list)
    renamed: Dict[Path, Path] = field(default_factory=dict)
    unmatched_motion: List[Path] = field(default_factory=list)

    def accept(self, pair: PairCandidate, consumed_still: Path) -> None:
        """Record a final pair; ``consumed_still`` is the still's snapshot path."""
        if consumed_still in self.processed_stills:
            raise ValueError(f"Still already consumed by another pair: {consumed_still}")
        self.kept.add(pair.motion.path)
        self.kept.add(pair.still.path)
        self.processed_stills.add(consumed_still)
        self.pairs.append(pair)

    def current_path(self, original: Path) -> Path:
        """Where a file from the pre-match snapshot lives now."""
        return self.renamed.get(original, original)

    @property
    def exact_count(self) -> int:
        return sum(1 for pair in self.pairs if pair.match_kind is not MatchKind.FUZZY)


@dataclass(frozen=True)
class DistributedPair:
    """A pair relocated into a versioned directory."""
    motion_source: Path
    still_source: Path
    motion_dest: Path
    still_dest: Path
