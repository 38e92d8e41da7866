"""
Exception hierarchy for livepair.

Anything raised from here aborts the whole run: the directory tree is
left as it was at the moment of failure and no summary is produced.
"""


class LivePairError(Exception):
    """Base exception for all livepair errors."""
    pass


class ScanError(LivePairError):
    """Raised when a directory or a file's metadata cannot be read."""
    pass


class RelocationError(LivePairError):
    """Raised when a destination directory cannot be created or a move fails."""
    pass
