"""
Core Live Photo repair and organization.
"""

import logging
from pathlib import Path
from typing import List, Optional

from rich.logging import RichHandler
from rich.table import Table

from .constants import FIRST_VERSION, PROGRAM, get_console, get_logger
from .distributor import Distributor
from .file_operations import FileOperations
from .history import HistoryManager
from .indexer import FileIndexer
from .matcher import PairMatcher
from .models import DistributedPair, MatchResult, RepairRecord
from .quarantine import Quarantine
from .stats import StatsManager, count_quarantined_files, count_versioned_files


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Route program logging to the rich console (WARNING, or DEBUG when verbose)."""
    logger = get_logger()
    for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(handler)

    console_handler = RichHandler(console=get_console(), rich_tracebacks=True)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)
    logger.setLevel(logging.DEBUG)  # Allow all messages to reach handlers
    return logger


class LivePhotoOrganizer:
    """Runs the matching, quarantine and distribution phases over one directory.

    The phases run strictly in sequence; any LivePairError aborts the run
    before a summary is produced.
    """

    def __init__(self, source: Path, quarantine_dir: Path, dest_root: Path,
                 root_dir: Optional[Path] = None, first_version: int = FIRST_VERSION):
        self.source = source
        self.quarantine_dir = quarantine_dir
        self.dest_root = dest_root
        self.first_version = first_version
        self.root_dir = root_dir or Path.home() / f".{PROGRAM}"
        self.console = get_console()
        self.logger = get_logger()
        self.stats_manager = StatsManager()

        self.file_ops = FileOperations()
        self.indexer = FileIndexer()
        self.matcher = PairMatcher(file_ops=self.file_ops)
        self.quarantine = Quarantine(quarantine_dir=quarantine_dir, file_ops=self.file_ops)
        self.distributor = Distributor(dest_root=dest_root, file_ops=self.file_ops,
                                       indexer=self.indexer, first_version=first_version)
        self.history_manager = HistoryManager(source_path=source, root_dir=self.root_dir)

        self.repairs: List[RepairRecord] = []
        self.distributed: List[DistributedPair] = []

    def run(self) -> MatchResult:
        """Execute a full run and record it in the run history."""
        self.history_manager.setup_run_logger(self.logger)
        try:
            self.logger.info(f"Starting run: {self.source}")
            self.logger.info(f"Quarantine: {self.quarantine_dir} | Destination root: {self.dest_root}")

            result = self.repair_and_quarantine()
            self.distribute()

            self.history_manager.log_run_summary(self.source, self.stats_manager)
            return result
        finally:
            self.history_manager.close(self.logger)

    def repair_and_quarantine(self) -> MatchResult:
        """Phase one: pair and repair, then move everything unkept out of the source."""
        snapshot = self.indexer.scan(self.source)
        result = self.matcher.match(snapshot)
        self.repairs = list(result.repairs)
        self.stats_manager.record_matching(exact=result.exact_count,
                                           repaired=len(result.repairs),
                                           unmatched=len(result.unmatched_motion))

        moved = self.quarantine.run(snapshot, result)
        self.stats_manager.increment_quarantined(len(moved))
        return result

    def distribute(self) -> List[DistributedPair]:
        """Phase two: move repaired pairs into versioned directories."""
        self.distributed = self.distributor.run(self.source)
        self.stats_manager.increment_distributed(len(self.distributed))
        return self.distributed

    def print_summary(self) -> None:
        """Print processing summary, repair list and final tree counts."""
        table = Table(title="Processing Summary")
        table.add_column("Category", style="cyan")
        table.add_column("Count", style="green")

        table.add_row("Exact Pairs", str(self.stats_manager.get_exact_pairs()))
        table.add_row("Repaired Pairs", str(self.stats_manager.get_fuzzy_repairs()))
        table.add_row("Unmatched Motion", str(self.stats_manager.get_unmatched_motion()))
        table.add_row("Quarantined", str(self.stats_manager.get_quarantined()))
        table.add_row("Distributed Pairs", str(self.stats_manager.get_distributed_pairs()))
        self.console.print(table)

        if not self.repairs:
            self.console.print("No fuzzy-matched Live Photos needed repair.")
        else:
            self.console.print(f"Repaired {len(self.repairs)} fuzzy-matched Live Photos:\n")
            for index, record in enumerate(self.repairs, start=1):
                self.console.print(f"Repair {index}:")
                self.console.print(f"  - Original: {record.original_motion.name}, "
                                   f"{record.original_still.name}")
                self.console.print(f"  - Repaired: {record.repaired_motion.name}, "
                                   f"{record.repaired_still.name}")

        self.console.print("\n[bold]Final file counts:[/bold]")
        self.console.print(f"  Live Photo folders ({self.first_version}APPLE, ...): "
                           f"{count_versioned_files(self.dest_root, self.first_version)}")
        self.console.print(f"  Quarantine folders ({self.quarantine_dir.name}, ...): "
                           f"{count_quarantined_files(self.quarantine_dir)}")
