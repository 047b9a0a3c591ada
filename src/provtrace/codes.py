"""Status and role constants for provtrace.

These constants prevent stringly-typed statuses and ensure
client code uses the correct markers.
"""

from enum import Enum


class FileStatus(str, Enum):
    """Result of comparing a recorded file against the live filesystem."""

    UNCHECKED = "unchecked"
    MISSING = "missing"
    CHANGED = "changed"
    UNCHANGED = "unchanged"

    @property
    def marker(self) -> str:
        """One-character marker used in the rendered report."""
        return _MARKERS[self]


_MARKERS = {
    FileStatus.UNCHECKED: " ",
    FileStatus.MISSING: "-",
    FileStatus.CHANGED: "+",
    FileStatus.UNCHANGED: ":",
}


class RecordRole(str, Enum):
    """Whether a file record was read or written by its script."""

    INPUT = "input"
    OUTPUT = "output"
