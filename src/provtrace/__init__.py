"""provtrace: file lineage across script runs from recorded provenance."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("provtrace")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from provtrace.api import trace, trace_after_run, build_lineage, load_provenance
from provtrace.config import TraceConfig
from provtrace.codes import FileStatus
from provtrace.errors import (
    TraceError,
    ConfigurationError,
    NotFoundError,
    OrderError,
    ToolError,
)
from provtrace.kernel.lineage import Lineage

__all__ = [
    "__version__",
    "trace",
    "trace_after_run",
    "build_lineage",
    "load_provenance",
    "TraceConfig",
    "FileStatus",
    "Lineage",
    "TraceError",
    "ConfigurationError",
    "NotFoundError",
    "OrderError",
    "ToolError",
]
