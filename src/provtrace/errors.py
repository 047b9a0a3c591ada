"""Exception types raised by provtrace.

Every error aborts the whole trace before any report text is produced.
Per-file filesystem problems are never raised; they show up as a status
marker in the report instead.
"""


class TraceError(Exception):
    """Base exception for provtrace errors."""
    pass


class ConfigurationError(TraceError, ValueError):
    """Raised when the caller supplied unusable scripts, directories or options."""
    pass


class NotFoundError(TraceError, FileNotFoundError):
    """Raised when a provenance record (or a script to run) does not exist."""

    def __init__(self, path, what: str = "Provenance record"):
        self.path = str(path)
        self.what = what
        super().__init__(f"{what} not found: {self.path}")


class OrderError(TraceError):
    """Raised when scripts were not executed in the order supplied."""

    def __init__(self, earlier: str, later: str, earlier_ts: str, later_ts: str):
        self.earlier = earlier
        self.later = later
        super().__init__(
            "Scripts were not run in this order: "
            f"{earlier} (executed {earlier_ts}) is listed before {later} (executed {later_ts})"
        )


class ToolError(TraceError):
    """Raised when a provenance collection backend is unknown or unavailable."""
    pass
