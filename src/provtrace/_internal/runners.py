"""Provenance collection backends used by trace_after_run.

Backends form a closed enumeration (ProvTool) mapped through RUNNERS to a
ScriptRunner. Adding a backend means adding an enum member and a registry
entry.
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from provtrace.config import CONSOLE
from provtrace.errors import ConfigurationError, NotFoundError, ToolError

logger = logging.getLogger(__name__)

RSCRIPT = "Rscript"


class ProvTool(str, Enum):
    """Provenance collectors that can run a script."""
    RDTLITE = "rdtLite"
    RDT = "rdt"


def parse_prov_tool(name: Union[str, ProvTool]) -> ProvTool:
    if isinstance(name, ProvTool):
        return name
    try:
        return ProvTool(name)
    except ValueError:
        choices = ", ".join(t.value for t in ProvTool)
        raise ToolError(f"Provenance collector must be one of: {choices} (got {name!r})") from None


class ScriptRunner(ABC):
    """Executes a script and leaves its provenance under prov_dir."""

    def ensure_available(self) -> None:
        """Raise ToolError if the backend cannot be used."""

    @abstractmethod
    def run(
        self,
        script: Path,
        prov_dir: Optional[Path] = None,
        details: bool = False,
        extra: Optional[Mapping[str, object]] = None,
    ) -> None:
        ...


def _r_literal(value: object) -> str:
    """Render a Python value as an R literal."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if value is None:
        return "NULL"
    if isinstance(value, (int, float)):
        return repr(value)
    text = str(value).replace("\\", "/").replace('"', '\\"')
    return f'"{text}"'


class RscriptRunner(ScriptRunner):
    """Runs <package>::prov.run(...) through Rscript."""

    def __init__(self, tool: ProvTool, rscript: str = RSCRIPT):
        self.tool = tool
        self.rscript = rscript

    def _rscript_path(self) -> str:
        path = shutil.which(self.rscript)
        if path is None:
            raise ToolError(f"{self.rscript} not found on PATH; R is required to run {self.tool.value}")
        return path

    def ensure_available(self) -> None:
        rscript = self._rscript_path()
        probe = (
            f'quit(status = if (requireNamespace("{self.tool.value}", quietly = TRUE)) 0 else 1)'
        )
        result = subprocess.run([rscript, "-e", probe], capture_output=True, text=True)
        if result.returncode != 0:
            raise ToolError(f"{self.tool.value} is not installed")

    def build_expression(
        self,
        script: Path,
        prov_dir: Optional[Path] = None,
        details: bool = False,
        extra: Optional[Mapping[str, object]] = None,
    ) -> str:
        args = [_r_literal(str(script)), f"details = {_r_literal(details)}"]
        if prov_dir is not None:
            args.append(f"prov.dir = {_r_literal(str(prov_dir))}")
        for key, value in sorted((extra or {}).items()):
            args.append(f"{key} = {_r_literal(value)}")
        return f"{self.tool.value}::prov.run({', '.join(args)})"

    def run(
        self,
        script: Path,
        prov_dir: Optional[Path] = None,
        details: bool = False,
        extra: Optional[Mapping[str, object]] = None,
    ) -> None:
        expression = self.build_expression(script, prov_dir, details, extra)
        logger.debug("Running %s", expression)
        result = subprocess.run(
            [self._rscript_path(), "-e", expression],
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            # Provenance is still written for scripts that stop with an error
            logger.warning(
                "%s exited with status %d: %s",
                script, result.returncode, result.stderr.strip(),
            )


RUNNERS: Dict[ProvTool, type] = {
    ProvTool.RDTLITE: RscriptRunner,
    ProvTool.RDT: RscriptRunner,
}


def get_runner(name: Union[str, ProvTool]) -> ScriptRunner:
    tool = parse_prov_tool(name)
    return RUNNERS[tool](tool)


def run_scripts(
    scripts,
    runner: ScriptRunner,
    prov_dir: Optional[Path] = None,
    details: bool = False,
    extra: Optional[Mapping[str, object]] = None,
) -> None:
    """Run each script in turn, in the order given.

    Every script is checked before the first one runs.
    """
    runner.ensure_available()
    paths = []
    for name in scripts:
        if name == CONSOLE:
            raise ConfigurationError("Console sessions cannot be run; use trace instead")
        script = Path(name)
        if not script.exists():
            raise NotFoundError(script, what="Script")
        paths.append(script.resolve())
    for script in paths:
        runner.run(script, prov_dir=prov_dir, details=details, extra=extra)
