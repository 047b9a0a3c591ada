"""Script name handling: list files, validation and provenance locations."""

from pathlib import Path, PurePosixPath
from typing import List, Sequence, Union

from provtrace.config import CONSOLE, PROV_JSON_FILENAME
from provtrace.errors import ConfigurationError

SCRIPT_LIST_SUFFIX = ".txt"
SCRIPT_SUFFIX = ".r"

ScriptsArg = Union[str, Path, Sequence[Union[str, Path]]]


def read_script_list(path: Union[str, Path]) -> List[str]:
    """Read script names from a text file, one per line. Blank lines are ignored."""
    list_path = Path(path)
    try:
        lines = list_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read script list {list_path}: {e}") from e
    if not lines:
        raise ConfigurationError(f"Script list is empty: {list_path}")
    return [line.strip() for line in lines if line.strip()]


def normalize_scripts(scripts: ScriptsArg) -> List[str]:
    """Expand the scripts argument into a list of names.

    A single name ending in .txt is read as a script list file.
    """
    if isinstance(scripts, (str, Path)):
        names = [str(scripts)]
    else:
        names = [str(s) for s in scripts]
    if len(names) == 1 and names[0].lower().endswith(SCRIPT_LIST_SUFFIX):
        names = read_script_list(names[0])
    check_scripts(names)
    return names


def check_scripts(scripts: Sequence[str]) -> None:
    if len(scripts) == 0:
        raise ConfigurationError("List of script names is empty")
    for name in scripts:
        if len(name) == 0:
            raise ConfigurationError("Script name is empty")


def script_stem(script: str) -> str:
    """Base name of a script without its .R suffix ("console" stays as is)."""
    if script == CONSOLE:
        return CONSOLE
    name = PurePosixPath(script.replace("\\", "/")).name
    if not name.lower().endswith(SCRIPT_SUFFIX) or len(name) <= len(SCRIPT_SUFFIX):
        raise ConfigurationError(f"Script name must end in .R or .r: {script}")
    return name[: -len(SCRIPT_SUFFIX)]


def prov_json_path(prov_dir: Path, script: str) -> Path:
    """Location of the provenance record written for a script."""
    return prov_dir / f"prov_{script_stem(script)}" / PROV_JSON_FILENAME
