"""
Run history: per-run log files and the global run audit log.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .stats import StatsManager


class HistoryManager:
    """Manages the per-run log folder and the global runs.log."""

    def __init__(self, source_path: Path, root_dir: Path):
        self.source_path = source_path
        self.root_dir = root_dir
        self.history_dir = self.root_dir / "history"
        self.runs_audit_log = self.root_dir / "runs.log"
        self.file_handler: Optional[logging.FileHandler] = None

        self._setup_run_folder()

    def _setup_run_folder(self) -> None:
        """Create the run folder, adding a counter if today's folder is already used."""
        timestamp = datetime.now().strftime("%Y-%m-%d")
        base_name = f"{timestamp}+{self._sanitize_name(self.source_path)}"

        folder_name = base_name
        folder = self.history_dir / folder_name
        counter = 1
        while folder.exists() and any(folder.iterdir()):
            folder_name = f"{base_name}-{counter:02d}"
            folder = self.history_dir / folder_name
            counter += 1

        folder.mkdir(parents=True, exist_ok=True)
        self.run_folder = folder
        self.run_folder_name = folder_name
        self.run_log = folder / "run.log"

    def _sanitize_name(self, path: Path) -> str:
        """Convert a directory path to a safe folder name."""
        sanitized = re.sub(r'[^\w\-_]', '-', path.name)
        sanitized = re.sub(r'-+', '-', sanitized)
        return sanitized.strip('-') or "root"

    def setup_run_logger(self, logger: logging.Logger) -> None:
        """Attach a DEBUG-level file handler writing to this run's log."""
        self.file_handler = logging.FileHandler(self.run_log, encoding='utf-8')
        self.file_handler.setLevel(logging.DEBUG)
        self.file_handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(name)s] %(levelname)s: %(message)s'
        ))
        logger.addHandler(self.file_handler)
        logger.setLevel(logging.DEBUG)

    def close(self, logger: logging.Logger) -> None:
        """Detach and close the run log handler."""
        if self.file_handler is not None:
            logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None

    def log_run_summary(self, source: Path, stats_manager: "StatsManager") -> None:
        """Append a one-line summary of a completed run to runs.log."""
        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        summary = (
            f"{timestamp} | Source: {source} | "
            f"Pairs: {stats_manager.get_kept_pairs()} "
            f"({stats_manager.get_exact_pairs()} exact, {stats_manager.get_fuzzy_repairs()} repaired) | "
            f"Quarantined: {stats_manager.get_quarantined()} | "
            f"Distributed: {stats_manager.get_distributed_pairs()} | "
            f"History: {self.run_folder_name}\n"
        )

        with open(self.runs_audit_log, 'a', encoding='utf-8') as f:
            f.write(summary)
