"""Public API for provtrace.

High-level functions that return complete results. Callers should use
these functions instead of importing from _internal.
"""

import logging
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

from provtrace.config import TraceConfig, resolve_prov_dir, resolve_save_dir
from provtrace.errors import NotFoundError
from provtrace.kernel.lineage import Lineage, build_lineage as _build_lineage
from provtrace.kernel.models import ScriptExecution
from provtrace.kernel.order import verify_execution_order
from provtrace.kernel.reconcile import FileSystemReconciler
from provtrace.kernel.records import collect_records, script_execution
from provtrace.report import render_lineage
from provtrace._internal.fs_check import make_file_checker
from provtrace._internal.io.prov_json import ProvenanceRecord, load_prov_json
from provtrace._internal.io.results import save_results
from provtrace._internal.io.script_list import ScriptsArg, normalize_scripts, prov_json_path
from provtrace._internal.runners import ProvTool, ScriptRunner, get_runner, run_scripts

logger = logging.getLogger(__name__)

PathArg = Union[str, Path]


def load_provenance(
    scripts: Sequence[str],
    prov_dir: Optional[PathArg] = None,
    config: Optional[TraceConfig] = None,
) -> List[ProvenanceRecord]:
    """Load the provenance record of each script, in the order given."""
    config = config or TraceConfig()
    resolved_dir = resolve_prov_dir(prov_dir, config)
    records = []
    for name in scripts:
        prov_file = prov_json_path(resolved_dir, name)
        if not prov_file.is_file():
            raise NotFoundError(prov_file)
        records.append(load_prov_json(prov_file))
    return records


def build_lineage(
    records: Sequence[ProvenanceRecord],
    check: bool = True,
    config: Optional[TraceConfig] = None,
    verify_order: bool = True,
) -> Lineage:
    """Classify the files of already-loaded provenance records.

    Args:
        records: Provenance records in execution order
        check: Whether to compare files against the live filesystem
        config: Trace configuration (defaults to TraceConfig())
        verify_order: Whether to check recorded execution timestamps

    Returns:
        Lineage with entries in display order
    """
    config = config or TraceConfig()
    executions: List[ScriptExecution] = [
        script_execution(index, record) for index, record in enumerate(records, start=1)
    ]
    if verify_order:
        verify_execution_order(executions)
    collected = collect_records(records)
    logger.debug(
        "Collected %d input and %d output record(s) from %d script(s)",
        len(collected.inputs), len(collected.outputs), len(executions),
    )
    reconciler = FileSystemReconciler(
        check=check,
        checker=make_file_checker(config.hash_chunk_size) if check else None,
        workers=config.check_workers,
    )
    return _build_lineage(
        executions,
        collected,
        reconciler,
        excluded_extensions=config.excluded_extensions,
    )


def _emit(lineage_text: str, console: bool, save: bool, save_dir: Optional[PathArg]) -> None:
    if console:
        sys.stdout.write("\n" + lineage_text)
    if save:
        save_results(lineage_text, save_dir)


def trace(
    scripts: ScriptsArg,
    prov_dir: Optional[PathArg] = None,
    file_details: bool = False,
    console: bool = True,
    save: bool = False,
    save_dir: Optional[PathArg] = None,
    check: bool = True,
    config: Optional[TraceConfig] = None,
) -> str:
    """Trace file lineage from existing provenance.

    Args:
        scripts: A script name, a list of script names, a .txt file of
            script names, or "console"
        prov_dir: Provenance directory (defaults to config.default_prov_dir)
        file_details: Whether to show timestamps, hashes and saved copies
        console: Whether to write the report to stdout
        save: Whether to save the report to prov-trace.txt
        save_dir: Where to save: None for the temp directory, "." for the
            current directory, otherwise an existing directory
        check: Whether to compare files against the live filesystem
        config: Trace configuration

    Returns:
        The report text

    Raises:
        ConfigurationError, NotFoundError, OrderError
    """
    config = config or TraceConfig()
    names = normalize_scripts(scripts)
    if save:
        resolve_save_dir(save_dir)
    records = load_provenance(names, prov_dir, config)
    lineage = build_lineage(records, check=check, config=config, verify_order=True)
    lineage_text = render_lineage(lineage, file_details=file_details)
    _emit(lineage_text, console, save, save_dir)
    return lineage_text


def trace_after_run(
    scripts: ScriptsArg,
    prov_dir: Optional[PathArg] = None,
    file_details: bool = False,
    console: bool = True,
    save: bool = False,
    save_dir: Optional[PathArg] = None,
    check: bool = True,
    prov_tool: Union[str, ProvTool] = ProvTool.RDTLITE,
    details: bool = False,
    runner: Optional[ScriptRunner] = None,
    runner_args: Optional[Mapping[str, object]] = None,
    config: Optional[TraceConfig] = None,
) -> str:
    """Run the scripts in order, collecting provenance, then trace file lineage.

    The execution order check is skipped since the scripts were just run in
    the order given. runner overrides the backend selected by prov_tool;
    runner_args are passed through to the backend.

    Raises:
        ConfigurationError, NotFoundError, ToolError
    """
    config = config or TraceConfig()
    names = normalize_scripts(scripts)
    resolved_dir = resolve_prov_dir(prov_dir, config)
    # Every name must map to a provenance location before anything runs
    for name in names:
        prov_json_path(resolved_dir, name)
    if save:
        resolve_save_dir(save_dir)
    script_runner = runner if runner is not None else get_runner(prov_tool)
    run_scripts(names, script_runner, prov_dir=resolved_dir, details=details, extra=runner_args)
    records = load_provenance(names, resolved_dir, config)
    lineage = build_lineage(records, check=check, config=config, verify_order=False)
    lineage_text = render_lineage(lineage, file_details=file_details)
    _emit(lineage_text, console, save, save_dir)
    return lineage_text
