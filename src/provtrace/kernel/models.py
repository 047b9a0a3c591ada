"""Core lineage records: executed scripts, file records and exchanges."""

from dataclasses import dataclass, replace
from pathlib import PurePosixPath
from typing import Optional

from provtrace.codes import RecordRole
from provtrace.config import CONSOLE_SCRIPT


@dataclass(frozen=True)
class ScriptExecution:
    """One traced script run, in caller-supplied execution order."""
    index: int  # 1-based
    script: str  # absolute script path, or "Console.R" for a console session
    script_hash: Optional[str]
    hash_algorithm: str
    timestamp: str  # script content timestamp
    executed_at: str  # provenance (execution) timestamp
    prov_dir: str

    @property
    def is_console(self) -> bool:
        return self.script == CONSOLE_SCRIPT

    @property
    def saved_copy(self) -> str:
        """Path of the copy of the script saved with its provenance."""
        name = PurePosixPath(self.script.replace("\\", "/")).name
        return f"{self.prov_dir}/scripts/{name}"


@dataclass(frozen=True)
class FileRecord:
    """A file read or written by one script.

    node_id is unique only within the owning script's provenance.
    Remote resources (URLs) carry an empty location and are identified by name.
    """
    role: RecordRole
    script: int
    node_id: str
    location: str
    name: str
    hash: str
    hash_algorithm: str
    timestamp: str
    saved_value: str  # saved copy, relative to the script's provenance directory
    prov_dir: str
    satisfied: bool = False

    @property
    def is_remote(self) -> bool:
        return self.location == ""

    @property
    def display_name(self) -> str:
        return self.name if self.is_remote else self.location

    @property
    def saved_copy(self) -> str:
        return f"{self.prov_dir}/{self.saved_value}"

    @property
    def extension(self) -> str:
        suffix = PurePosixPath(self.display_name.replace("\\", "/")).suffix
        return suffix[1:] if suffix else ""

    def mark_satisfied(self) -> "FileRecord":
        return replace(self, satisfied=True)


@dataclass(frozen=True)
class ExchangePair:
    """A file written by an earlier script and read by a later one."""
    producer: int
    consumer: int
    output: FileRecord
    input: FileRecord

    @property
    def location_changed(self) -> bool:
        return self.output.location != self.input.location
