"""
Test quarantine of unpaired and unrecognized files.
"""

import pytest

from livepair.file_operations import FileOperations
from livepair.indexer import FileIndexer
from livepair.matcher import PairMatcher
from livepair.quarantine import Quarantine


@pytest.fixture
def run_phase_one(source_dir, quarantine_dir):
    """Match and quarantine the capture folder."""

    def run():
        file_ops = FileOperations()
        snapshot = FileIndexer().scan(source_dir)
        result = PairMatcher(file_ops).match(snapshot)
        moved = Quarantine(quarantine_dir, file_ops).run(snapshot, result)
        return result, moved

    return run


class TestQuarantine:

    def test_orphan_motion_is_quarantined(self, create_capture_files, quarantine_dir,
                                          run_phase_one, list_names):
        create_capture_files([{"name": "IMG_9999.MOV", "mtime": 9999}])

        _, moved = run_phase_one()

        assert moved == [quarantine_dir / "IMG_9999.MOV"]
        assert list_names(quarantine_dir) == ["IMG_9999.MOV"]

    def test_orphan_goes_to_numbered_sibling_on_collision(self, create_capture_files, card_root,
                                                          quarantine_dir, run_phase_one):
        create_capture_files([{"name": "IMG_9999.MOV", "content": b"earlier"}],
                             directory=quarantine_dir)
        create_capture_files([{"name": "IMG_9999.MOV", "content": b"today"}])

        _, moved = run_phase_one()

        assert moved == [card_root / "Other1" / "IMG_9999.MOV"]
        assert (quarantine_dir / "IMG_9999.MOV").read_bytes() == b"earlier"

    def test_quarantine_is_exhaustive_and_exact(self, create_capture_files, source_dir,
                                                quarantine_dir, run_phase_one, list_names):
        create_capture_files([
            {"name": "IMG_0001.MOV", "mtime": 100},
            {"name": "IMG_0001.HEIC", "mtime": 100},
            {"name": "IMG_0002.MOV", "mtime": 200},
            {"name": "IMG_00025.JPG", "mtime": 200},
            {"name": "IMG_0003.HEIC", "mtime": 300},
            {"name": "IMG_0004.MOV", "mtime": 400},
            {"name": "IMG_0004.JPG", "mtime": 401},
            {"name": "._IMG_0001.HEIC", "mtime": 100},
            {"name": "IMG_0001.AAE", "mtime": 100},
            {"name": "notes.txt"},
        ])

        result, _ = run_phase_one()

        assert sorted(p.name for p in result.kept) == list_names(source_dir)
        assert list_names(source_dir) == [
            "IMG_0001.HEIC", "IMG_0001.MOV", "IMG_00025.JPG", "IMG_00025.MOV"
        ]
        assert list_names(quarantine_dir) == [
            "._IMG_0001.HEIC", "IMG_0001.AAE", "IMG_0003.HEIC", "IMG_0004.JPG",
            "IMG_0004.MOV", "notes.txt"
        ]

    def test_renamed_originals_are_not_quarantined(self, create_capture_files, quarantine_dir,
                                                   run_phase_one, list_names):
        create_capture_files([
            {"name": "IMG_00051.MOV", "mtime": 500},
            {"name": "IMG_0005.HEIC", "mtime": 500},
        ])

        result, moved = run_phase_one()

        assert len(result.repairs) == 1
        assert moved == []
        assert list_names(quarantine_dir) == []

    def test_ambiguous_set_falls_through_to_quarantine(self, create_capture_files, source_dir,
                                                       quarantine_dir, run_phase_one, list_names):
        create_capture_files([
            {"name": "IMG_0006.MOV", "mtime": 600},
            {"name": "IMG_00061.HEIC", "mtime": 600},
            {"name": "IMG_00062.HEIC", "mtime": 600},
        ])

        run_phase_one()

        assert list_names(source_dir) == []
        assert list_names(quarantine_dir) == ["IMG_0006.MOV", "IMG_00061.HEIC", "IMG_00062.HEIC"]
