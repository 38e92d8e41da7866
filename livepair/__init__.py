"""
livepair - Repair and organize Live Photo pairs from a camera folder.

Pairs each motion file with its still, repairs filenames the camera
numbered inconsistently, quarantines everything unpaired and moves the
repaired pairs into versioned NNNAPPLE folders without ever overwriting
a file.
"""

__version__ = "1.0.0"


# Public API
from .cli import main
from .core import LivePhotoOrganizer
from .distributor import Distributor
from .file_operations import FileOperations
from .indexer import FileIndexer
from .matcher import PairMatcher
from .quarantine import Quarantine

__all__ = [ "main", "LivePhotoOrganizer", "Distributor", "FileOperations",
            "FileIndexer", "PairMatcher", "Quarantine" ]
