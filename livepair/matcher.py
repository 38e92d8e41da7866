"""
Live Photo pairing and filename repair.
"""

from pathlib import Path
from typing import Dict, List, Optional, Set

from .constants import CAPTURE_PREFIX, PREFIX_LENGTH, get_logger
from .file_operations import FileOperations
from .models import (CaptureFile, DirectorySnapshot, MatchKind, MatchResult, PairCandidate,
                     RepairRecord)


class PairMatcher:
    """Pairs every motion file with at most one still, repairing near-miss names.

    Motion files are visited in stem order so that fuzzy outcomes do not
    depend on directory enumeration order. For each one the first
    successful rule wins:

    1. a HEIC with the same stem and modification time
    2. a JPEG with the same stem and modification time
    3. the single unconsumed still sharing the motion's 8-character
       ``IMG_`` prefix and modification time; zero or several candidates
       means no match

    Rules 1 and 2 run over every motion file before any fuzzy match is
    tried, so a still with an exact partner is never offered as a fuzzy
    candidate.

    A fuzzy match renames the member with the shorter stem to the longer
    stem. If that rename is refused or fails the pair is dropped.
    """

    def __init__(self, file_ops: FileOperations):
        self.file_ops = file_ops
        self.logger = get_logger("livepair.matcher")

    def match(self, snapshot: DirectorySnapshot) -> MatchResult:
        """Run one matching pass over ``snapshot``."""
        result = MatchResult()
        pending: List[CaptureFile] = []

        for stem in sorted(snapshot.mov):
            motion = snapshot.mov[stem]
            candidate = self.find_exact(motion, snapshot, result.processed_stills)
            if candidate is None:
                pending.append(motion)
                continue
            self.logger.debug(f"Paired {motion.path.name} + {candidate.still.path.name}")
            result.accept(candidate, consumed_still=candidate.still.path)

        for motion in pending:
            candidate = self.find_fuzzy(motion, snapshot, result.processed_stills)
            if candidate is None:
                self.logger.debug(f"No still found for {motion.path.name}")
                result.unmatched_motion.append(motion.path)
                continue

            repaired = self.repair(candidate, result)
            if repaired is None:
                result.unmatched_motion.append(motion.path)
                continue
            result.accept(repaired, consumed_still=candidate.still.path)

        self.logger.info(
            f"Matched {len(result.pairs)} pairs ({len(result.repairs)} repaired), "
            f"{len(result.unmatched_motion)} motion files unmatched"
        )
        return result

    def find_exact(self, motion: CaptureFile, snapshot: DirectorySnapshot,
                   processed: Set[Path]) -> Optional[PairCandidate]:
        """Same stem and time, HEIC preferred over JPEG."""
        for mapping, kind in ((snapshot.heic, MatchKind.EXACT_HEIC),
                              (snapshot.jpeg, MatchKind.EXACT_JPEG)):
            still = mapping.get(motion.stem)
            if still is not None and self._available(still, motion, processed):
                return PairCandidate(motion=motion, still=still, match_kind=kind)
        return None

    def find_fuzzy(self, motion: CaptureFile, snapshot: DirectorySnapshot,
                   processed: Set[Path]) -> Optional[PairCandidate]:
        """Unique still sharing the motion's capture prefix and time."""
        if not self.has_capture_prefix(motion.stem):
            return None

        prefix = motion.stem[:PREFIX_LENGTH]
        candidates = self.fuzzy_candidates(motion, prefix, snapshot.stills(), processed)

        if len(candidates) != 1:
            if candidates:
                names = ", ".join(c.path.name for c in candidates)
                self.logger.debug(f"Ambiguous stills for {motion.path.name}: {names}")
            return None

        return PairCandidate(motion=motion, still=candidates[0], match_kind=MatchKind.FUZZY)

    def fuzzy_candidates(self, motion: CaptureFile, prefix: str, stills: List[CaptureFile],
                         processed: Set[Path]) -> List[CaptureFile]:
        return [still for still in stills
                if self._available(still, motion, processed) and still.stem.startswith(prefix)]

    def repair(self, candidate: PairCandidate, result: MatchResult) -> Optional[PairCandidate]:
        """Give both members of a fuzzy pair the longer of their two stems."""
        motion, still = candidate.motion, candidate.still

        if len(motion.stem) > len(still.stem):
            new_path = self.file_ops.rename_stem(still.path, motion.stem)
            if new_path is None:
                return None
            still = still.renamed(new_path)
        else:
            new_path = self.file_ops.rename_stem(motion.path, still.stem)
            if new_path is None:
                return None
            motion = motion.renamed(new_path)

        record = RepairRecord(original_motion=candidate.motion.path,
                              original_still=candidate.still.path,
                              repaired_motion=motion.path,
                              repaired_still=still.path)
        result.repairs.append(record)
        result.renamed.update(self._renames(record))
        self.logger.info(
            f"Repaired pair {record.original_motion.name} + {record.original_still.name} "
            f"-> {record.repaired_motion.name} + {record.repaired_still.name}"
        )
        return PairCandidate(motion=motion, still=still, match_kind=MatchKind.FUZZY)

    @staticmethod
    def has_capture_prefix(stem: str) -> bool:
        return stem.startswith(CAPTURE_PREFIX) and len(stem) >= PREFIX_LENGTH

    @staticmethod
    def _available(still: CaptureFile, motion: CaptureFile, processed: Set[Path]) -> bool:
        return still.path not in processed and still.modified == motion.modified

    @staticmethod
    def _renames(record: RepairRecord) -> Dict[Path, Path]:
        return {original: repaired
                for original, repaired in ((record.original_motion, record.repaired_motion),
                                           (record.original_still, record.repaired_still))
                if original != repaired}
