"""Detect files exchanged between scripts (written by one, read by a later one)."""

from typing import List, Sequence, Tuple

from .matching import index_by_hash
from .models import ExchangePair, FileRecord


def detect_exchanges(
    script_count: int,
    inputs: Sequence[FileRecord],
    outputs: Sequence[FileRecord],
) -> Tuple[ExchangePair, ...]:
    """Emit one ExchangePair per (earlier output, later input) with equal hash.

    Consumers are visited in script order, their inputs in collection order,
    and producers in collection order. When the same content is written by
    several earlier scripts, each producer yields its own pair; chains are not
    collapsed.
    """
    if script_count <= 1:
        return ()
    outputs_by_hash = index_by_hash(outputs)
    pairs: List[ExchangePair] = []
    for consumer in range(2, script_count + 1):
        for record in inputs:
            if record.script != consumer or not record.hash:
                continue
            for output in outputs_by_hash.get(record.hash, ()):
                if output.script < consumer:
                    pairs.append(ExchangePair(
                        producer=output.script,
                        consumer=consumer,
                        output=output,
                        input=record,
                    ))
    return tuple(pairs)
