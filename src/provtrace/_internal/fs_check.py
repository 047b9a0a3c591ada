"""Filesystem probe used by the reconciler."""

import logging
from pathlib import Path

from provtrace.codes import FileStatus
from provtrace.kernel.hash_utils import UnsupportedAlgorithmError, hash_chunks, hashes_equal
from provtrace.kernel.reconcile import FileProbe

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


def _read_chunks(path: Path, chunk_size: int):
    with open(path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            yield chunk


def hash_file(path: Path, algorithm: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    return hash_chunks(_read_chunks(path, chunk_size), algorithm)


def check_file_system(
    location: str,
    recorded_hash: str,
    algorithm: str,
    check: bool = True,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> FileStatus:
    """Check whether a recorded file still exists with the same content.

    A file that cannot be read or hashed is reported as changed, since its
    recorded content can no longer be confirmed.
    """
    if not check:
        return FileStatus.UNCHECKED
    path = Path(location)
    if not path.exists():
        return FileStatus.MISSING
    try:
        current = hash_file(path, algorithm, chunk_size)
    except (OSError, UnsupportedAlgorithmError) as e:
        logger.warning("Cannot hash %s: %s", location, e)
        return FileStatus.CHANGED
    if not hashes_equal(recorded_hash, current, algorithm):
        return FileStatus.CHANGED
    return FileStatus.UNCHANGED


def make_file_checker(chunk_size: int = DEFAULT_CHUNK_SIZE):
    """Adapt check_file_system to the reconciler's probe interface."""
    def checker(probe: FileProbe) -> FileStatus:
        return check_file_system(probe.location, probe.hash, probe.algorithm, chunk_size=chunk_size)
    return checker
