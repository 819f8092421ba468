"""Exceptions raised by sparsepred."""


class SparsepredError(Exception):
    """Base exception for all sparsepred errors."""

    pass


class IteratorExhaustedError(SparsepredError, IndexError):
    """Raised when an exhausted index/value iterator is read or advanced."""

    pass


class InvalidRangeError(SparsepredError, ValueError):
    """Raised when an iterator is built over an invalid [begin, end) range."""

    def __init__(self, begin: int, end: int, length: int):
        super().__init__(
            f"Invalid range [{begin}, {end}) over a sequence of length {length}."
        )
        self.begin = begin
        self.end = end
        self.length = length


class ArchiveError(SparsepredError, KeyError):
    """Raised when a named field is missing from an archive."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""
