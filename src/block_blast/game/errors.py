from __future__ import annotations


class BlockBlastError(Exception):
    """Base class for engine errors."""


class OutOfRangeError(BlockBlastError, IndexError):
    """A tray index or board coordinate falls outside its bounds."""
