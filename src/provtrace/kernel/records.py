"""Flatten per-script provenance into script-tagged file records."""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from provtrace.codes import RecordRole
from .models import FileRecord, ScriptExecution


@dataclass(frozen=True)
class CollectedRecords:
    """All input and all output records, in per-script then script order."""
    inputs: Tuple[FileRecord, ...]
    outputs: Tuple[FileRecord, ...]


def script_execution(index: int, record) -> ScriptExecution:
    """Build the ScriptExecution for the index-th (1-based) provenance record."""
    env = record.environment
    return ScriptExecution(
        index=index,
        script=env.script,
        script_hash=env.script_hash,
        hash_algorithm=env.hash_algorithm,
        timestamp=env.script_timestamp,
        executed_at=env.prov_timestamp,
        prov_dir=env.prov_directory,
    )


def _tag(role: RecordRole, index: int, record, files) -> List[FileRecord]:
    env = record.environment
    return [
        FileRecord(
            role=role,
            script=index,
            node_id=f.id,
            location=f.location,
            name=f.name,
            hash=f.hash,
            hash_algorithm=env.hash_algorithm,
            timestamp=f.timestamp,
            saved_value=f.value,
            prov_dir=env.prov_directory,
        )
        for f in files
    ]


def collect_records(records: Sequence) -> CollectedRecords:
    """Tag every file record with its script index and hash algorithm.

    records are parsed provenance records in execution order; each exposes
    environment, inputs and outputs. Nothing is deduplicated: a file read
    twice by one script yields two records.
    """
    inputs: List[FileRecord] = []
    outputs: List[FileRecord] = []
    for index, record in enumerate(records, start=1):
        inputs.extend(_tag(RecordRole.INPUT, index, record, record.inputs))
        outputs.extend(_tag(RecordRole.OUTPUT, index, record, record.outputs))
    return CollectedRecords(inputs=tuple(inputs), outputs=tuple(outputs))
