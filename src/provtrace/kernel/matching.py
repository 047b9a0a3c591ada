"""Decide which input records are true external requirements.

An input record is satisfied (not a true input) when:
1. An earlier script wrote a file with the same hash, or
2. The same script wrote it and the output is the same data node
   (a file the script itself created earlier in the run), or
3. Its extension is on the exclusion list (implicitly loaded package data).

Equal hashes with a different data node in the same script do NOT satisfy
each other: reading a file and later overwriting it with identical content
still means the file was required.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from .models import FileRecord


@dataclass(frozen=True)
class InputClassification:
    """Inputs split into true inputs (sorted) and satisfied inputs (collection order)."""
    true_inputs: Tuple[FileRecord, ...]
    satisfied: Tuple[FileRecord, ...]


def index_by_hash(outputs: Iterable[FileRecord]) -> Dict[str, List[FileRecord]]:
    """Group outputs by hash, preserving collection order within each group."""
    index: Dict[str, List[FileRecord]] = defaultdict(list)
    for record in outputs:
        if record.hash:
            index[record.hash].append(record)
    return dict(index)


def display_sort_key(record: FileRecord) -> Tuple[int, str]:
    """Sort by script index, then declared path (name for remote records)."""
    return (record.script, record.display_name)


def _matched_by_output(record: FileRecord, outputs_by_hash: Dict[str, List[FileRecord]]) -> bool:
    if not record.hash:
        return False
    for output in outputs_by_hash.get(record.hash, ()):
        if output.script < record.script:
            return True
        if output.script == record.script and output.node_id == record.node_id:
            return True
    return False


def classify_inputs(
    inputs: Sequence[FileRecord],
    outputs: Sequence[FileRecord],
    excluded_extensions: Iterable[str] = ("rds",),
) -> InputClassification:
    outputs_by_hash = index_by_hash(outputs)
    excluded = set(excluded_extensions)

    true_inputs: List[FileRecord] = []
    satisfied: List[FileRecord] = []
    for record in inputs:
        if _matched_by_output(record, outputs_by_hash) or record.extension in excluded:
            satisfied.append(record.mark_satisfied())
        else:
            true_inputs.append(record)

    true_inputs.sort(key=display_sort_key)
    return InputClassification(true_inputs=tuple(true_inputs), satisfied=tuple(satisfied))


def sort_outputs(outputs: Sequence[FileRecord]) -> Tuple[FileRecord, ...]:
    return tuple(sorted(outputs, key=display_sort_key))
