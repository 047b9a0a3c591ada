"""Check that scripts were supplied in the order they were executed."""

from typing import Sequence

from provtrace.errors import OrderError
from .models import ScriptExecution


def verify_execution_order(executions: Sequence[ScriptExecution]) -> None:
    """Raise OrderError if recorded execution timestamps decrease anywhere.

    Not relevant for a single script. Timestamps are compared as recorded;
    provenance writes them in a lexically sortable form.
    """
    if len(executions) <= 1:
        return
    for earlier, later in zip(executions, executions[1:]):
        if earlier.executed_at > later.executed_at:
            raise OrderError(
                earlier=earlier.script,
                later=later.script,
                earlier_ts=earlier.executed_at,
                later_ts=later.executed_at,
            )
