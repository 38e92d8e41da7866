"""
pytest configuration and fixtures for livepair tests.
"""

import io
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List

import pytest

# Capture times in whole seconds; converted to exact nanosecond mtimes
T0 = 1_700_000_000


@dataclass
class CliResult:
    """Result from running CLI command."""
    exit_code: int
    output: str
    error: str


def set_mtime(path: Path, seconds: int) -> None:
    ns = seconds * 1_000_000_000
    os.utime(path, ns=(ns, ns))


@pytest.fixture
def card_root(tmp_path):
    """A DCIM-like root holding the capture folder ``100APPLE``."""
    root = tmp_path / "DCIM"
    (root / "100APPLE").mkdir(parents=True)
    return root


@pytest.fixture
def source_dir(card_root):
    return card_root / "100APPLE"


@pytest.fixture
def quarantine_dir(card_root):
    return card_root / "Other"


@pytest.fixture
def create_capture_files(source_dir):
    """Helper to create capture files with exact modification times."""

    def create_files(file_specs: List[dict], directory: Path = None) -> Path:
        """Create files based on specifications.

        Args:
            file_specs: List of dicts with keys:
                - name: filename
                - mtime: modification time in seconds (optional, default T0)
                - content: file content (optional, defaults to the name)
            directory: target directory (default: the capture folder)

        Returns:
            Path to directory containing created files
        """
        target = directory or source_dir
        target.mkdir(parents=True, exist_ok=True)

        for spec in file_specs:
            file_path = target / spec['name']
            content = spec.get('content', spec['name'].encode())
            if isinstance(content, str):
                file_path.write_text(content)
            else:
                file_path.write_bytes(content)
            set_mtime(file_path, spec.get('mtime', T0))

        return target

    return create_files


@pytest.fixture
def list_names():
    """Sorted file names of a directory (empty if it does not exist)."""

    def names(directory: Path) -> List[str]:
        if not directory.exists():
            return []
        return sorted(p.name for p in directory.iterdir() if p.is_file())

    return names


@pytest.fixture
def state_dir(tmp_path):
    """Isolated program root for run history."""
    return tmp_path / "state"


@pytest.fixture
def cli_runner():
    """Create a CLI runner that captures output and uses an isolated run history."""

    def run_cli(*args, root_dir=None):
        """Run livepair CLI with given arguments.

        Args:
            *args: Command line arguments
            root_dir: Optional run history directory for test isolation

        Returns:
            CliResult with exit_code, output, and error
        """
        from livepair.cli import main

        old_stdout = sys.stdout
        old_stderr = sys.stderr
        old_argv = sys.argv
        stdout = io.StringIO()
        stderr = io.StringIO()

        try:
            sys.stdout = stdout
            sys.stderr = stderr
            sys.argv = ['livepair'] + [str(a) for a in args]

            exit_code = main(root_dir=root_dir)
            return CliResult(exit_code=exit_code, output=stdout.getvalue(),
                             error=stderr.getvalue())
        except SystemExit as e:
            return CliResult(exit_code=e.code if e.code is not None else 0,
                             output=stdout.getvalue(), error=stderr.getvalue())
        finally:
            sys.stdout = old_stdout
            sys.stderr = old_stderr
            sys.argv = old_argv

    return run_cli
