from __future__ import annotations


class BlockSudokuError(Exception):
    """Base class for engine errors."""


class StaleClearResultError(BlockSudokuError, AssertionError):
    """A ClearResult was applied to a board other than the one it was detected on,
    or to the same board after it had been mutated."""


class SnapshotError(BlockSudokuError, ValueError):
    """Raised by strict snapshot loading for malformed data."""


class UnknownShapeError(BlockSudokuError, KeyError):
    """Catalog lookup or registration problem for a shape id."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""
