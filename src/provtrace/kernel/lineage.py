"""Assemble classified, reconciled lineage for a set of traced scripts."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from provtrace.codes import FileStatus
from .exchanges import detect_exchanges
from .matching import classify_inputs, sort_outputs
from .models import ExchangePair, FileRecord, ScriptExecution
from .reconcile import FileProbe, FileSystemReconciler
from .records import CollectedRecords


class ScriptEntry(BaseModel):
    index: int
    script: str
    status: FileStatus
    timestamp: str
    hash: Optional[str]
    hash_algorithm: str
    saved: str
    executed: str

    model_config = ConfigDict(extra="forbid")


class FileEntry(BaseModel):
    script: int
    display: str  # declared path, or name for remote resources
    remote: bool
    status: FileStatus
    timestamp: str
    hash: str
    hash_algorithm: str
    saved: str

    model_config = ConfigDict(extra="forbid")


class ExchangeEntry(BaseModel):
    producer: int
    consumer: int
    display: str  # consumer-side path
    producer_location: str
    location_changed: bool
    status: FileStatus
    timestamp: str
    hash: str
    hash_algorithm: str
    saved_out: str  # producer's saved copy
    saved_in: str  # consumer's saved copy

    model_config = ConfigDict(extra="forbid")


class Lineage(BaseModel):
    """Stable result model for a lineage trace, in display order."""
    script_count: int
    scripts: List[ScriptEntry]
    inputs: List[FileEntry]
    outputs: List[FileEntry]
    exchanges: List[ExchangeEntry]

    model_config = ConfigDict(extra="forbid")

    @property
    def shows_exchanges(self) -> bool:
        return self.script_count > 1


def _script_probe(execution: ScriptExecution) -> Optional[FileProbe]:
    if execution.is_console or not execution.script_hash:
        return None
    return FileProbe(execution.script, execution.script_hash, execution.hash_algorithm)


def _file_probe(record: FileRecord) -> Optional[FileProbe]:
    if record.is_remote:
        return None
    return FileProbe(record.location, record.hash, record.hash_algorithm)


def _file_entry(record: FileRecord, status: FileStatus) -> FileEntry:
    return FileEntry(
        script=record.script,
        display=record.display_name,
        remote=record.is_remote,
        status=status,
        timestamp=record.timestamp,
        hash=record.hash,
        hash_algorithm=record.hash_algorithm,
        saved=record.saved_copy,
    )


def _exchange_entry(pair: ExchangePair, status: FileStatus) -> ExchangeEntry:
    consumed = pair.input
    return ExchangeEntry(
        producer=pair.producer,
        consumer=pair.consumer,
        display=consumed.display_name,
        producer_location=pair.output.display_name,
        location_changed=pair.location_changed,
        status=status,
        timestamp=consumed.timestamp,
        hash=consumed.hash,
        hash_algorithm=consumed.hash_algorithm,
        saved_out=pair.output.saved_copy,
        saved_in=consumed.saved_copy,
    )


def build_lineage(
    executions: Sequence[ScriptExecution],
    collected: CollectedRecords,
    reconciler: FileSystemReconciler,
    excluded_extensions: Iterable[str] = ("rds",),
) -> Lineage:
    """Classify records and attach a filesystem status to every displayed file.

    All statuses are computed in one batch so the reconciler may probe in
    parallel; entries keep the deterministic display order either way.
    """
    classification = classify_inputs(collected.inputs, collected.outputs, excluded_extensions)
    outputs = sort_outputs(collected.outputs)
    pairs = detect_exchanges(len(executions), collected.inputs, collected.outputs)

    probes: List[Optional[FileProbe]] = []
    probes.extend(_script_probe(e) for e in executions)
    probes.extend(_file_probe(r) for r in classification.true_inputs)
    probes.extend(_file_probe(r) for r in outputs)
    probes.extend(_file_probe(p.input) for p in pairs)
    statuses = iter(reconciler.reconcile_all(probes))

    scripts = [
        ScriptEntry(
            index=e.index,
            script=e.script,
            status=next(statuses),
            timestamp=e.timestamp,
            hash=e.script_hash,
            hash_algorithm=e.hash_algorithm,
            saved=e.saved_copy,
            executed=e.executed_at,
        )
        for e in executions
    ]
    inputs = [_file_entry(r, next(statuses)) for r in classification.true_inputs]
    output_entries = [_file_entry(r, next(statuses)) for r in outputs]
    exchanges = [_exchange_entry(p, next(statuses)) for p in pairs]

    return Lineage(
        script_count=len(executions),
        scripts=scripts,
        inputs=inputs,
        outputs=output_entries,
        exchanges=exchanges,
    )
