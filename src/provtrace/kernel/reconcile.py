"""Compare recorded files against the live filesystem.

The kernel only decides which files are probed and keeps results in
display order; the probe itself (existence check and re-hash) is supplied
by the caller.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from provtrace.codes import FileStatus


@dataclass(frozen=True)
class FileProbe:
    location: str
    hash: str
    algorithm: str


FileChecker = Callable[[FileProbe], FileStatus]


class FileSystemReconciler:
    """Computes a FileStatus per displayed file, never caching results.

    A probe of None marks an entry that is never checked (remote resources,
    console sessions, scripts without a recorded hash).
    """

    def __init__(self, check: bool, checker: Optional[FileChecker] = None, workers: int = 1):
        if check and checker is None:
            raise ValueError("A file checker is required when check is enabled")
        self.check = check
        self.checker = checker
        self.workers = max(1, workers)

    def status(self, probe: Optional[FileProbe]) -> FileStatus:
        if not self.check or probe is None or not probe.location:
            return FileStatus.UNCHECKED
        return self.checker(probe)

    def reconcile_all(self, probes: Sequence[Optional[FileProbe]]) -> List[FileStatus]:
        """Statuses for probes, in the same order as probes."""
        if not self.check:
            return [FileStatus.UNCHECKED] * len(probes)
        if self.workers == 1 or len(probes) <= 1:
            return [self.status(probe) for probe in probes]
        # map() yields in submission order regardless of completion order
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            return list(pool.map(self.status, probes))
