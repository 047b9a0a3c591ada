"""Trace configuration and path resolution."""

import os
import tempfile
from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from provtrace.errors import ConfigurationError

RESULTS_FILENAME = "prov-trace.txt"
PROV_JSON_FILENAME = "prov.json"
PROV_DIR_ENV_VAR = "PROVTRACE_PROV_DIR"
CONSOLE = "console"
# Script name rdtLite records for a console session
CONSOLE_SCRIPT = "Console.R"

# Serialized R objects are loaded implicitly as package data, not traceable inputs.
DEFAULT_EXCLUDED_EXTENSIONS = ("rds",)


class TraceConfig(BaseModel):
    """Explicit configuration threaded through every trace call."""
    default_prov_dir: Optional[Path] = None  # used when a call passes no prov_dir
    excluded_extensions: Tuple[str, ...] = DEFAULT_EXCLUDED_EXTENSIONS
    check_workers: int = Field(default=1, ge=1)  # >1 reconciles files on a thread pool
    hash_chunk_size: int = Field(default=1024 * 1024, gt=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_env(cls, **overrides) -> "TraceConfig":
        """Build a config whose default provenance directory comes from the environment."""
        values = dict(overrides)
        env_dir = os.environ.get(PROV_DIR_ENV_VAR)
        if env_dir and values.get("default_prov_dir") is None:
            values["default_prov_dir"] = Path(env_dir)
        return cls(**values)


def resolve_prov_dir(
    prov_dir: Optional[Union[str, Path]],
    config: TraceConfig,
) -> Path:
    """Resolve the provenance directory, falling back to the configured default."""
    if prov_dir is None:
        if config.default_prov_dir is None:
            raise ConfigurationError(
                "No provenance directory given and no default configured "
                f"(set prov_dir or {PROV_DIR_ENV_VAR})"
            )
        candidate = Path(config.default_prov_dir)
    else:
        candidate = Path(prov_dir)
    resolved = candidate.expanduser().resolve()
    if not resolved.is_dir():
        raise ConfigurationError(f"Provenance directory not found: {resolved}")
    return resolved


def resolve_save_dir(save_dir: Optional[Union[str, Path]]) -> Path:
    """Return the directory for the results file.

    None selects the system temporary directory and "." the current working
    directory. Any other value must name an existing directory.
    """
    if save_dir is None:
        return Path(tempfile.gettempdir()).resolve()
    if str(save_dir) == ".":
        return Path.cwd()
    resolved = Path(save_dir).expanduser().resolve()
    if not resolved.is_dir():
        raise ConfigurationError(f"Save directory not found: {resolved}")
    return resolved
