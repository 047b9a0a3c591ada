"""Text report for a traced lineage.

Sections, in order: SCRIPTS, INPUTS, OUTPUTS, EXCHANGES. EXCHANGES is
omitted entirely (header included) for a single script. Each entry line is
"<script> <marker> <path>", where the marker is one of:
  "-"  file no longer exists
  "+"  file exists but its hash has changed
  ":"  file exists and its hash is unchanged
  " "  not checked
Sections with no entries show "None".
"""

from typing import List

from provtrace.kernel.lineage import ExchangeEntry, FileEntry, Lineage, ScriptEntry

INDENT = " " * 8
NONE_MARKER = "None"


def _detail(label: str, value: str) -> str:
    return f"{INDENT}{label:<11}{value}\n"


def _hash_value(hash_value, algorithm: str) -> str:
    return f"{hash_value if hash_value else 'NA'}/{algorithm}"


def _section(header: str, entries: List[str]) -> str:
    body = "".join(entries) if entries else f"{NONE_MARKER}\n"
    return f"{header}:\n\n{body}\n"


def _render_script(entry: ScriptEntry, file_details: bool) -> str:
    st = f"{entry.index} {entry.status.marker} {entry.script}\n"
    if file_details:
        st += _detail("Timestamp:", entry.timestamp)
        st += _detail("Hash:", _hash_value(entry.hash, entry.hash_algorithm))
        st += _detail("Saved:", entry.saved)
        st += _detail("Executed:", entry.executed)
        st += "\n"
    return st


def _render_file(entry: FileEntry, file_details: bool) -> str:
    st = f"{entry.script} {entry.status.marker} {entry.display}\n"
    if file_details:
        st += _detail("Timestamp:", entry.timestamp)
        st += _detail("Hash:", _hash_value(entry.hash, entry.hash_algorithm))
        st += _detail("Saved:", entry.saved)
        st += "\n"
    return st


def _render_exchange(entry: ExchangeEntry, file_details: bool) -> str:
    st = f"{entry.producer} > {entry.consumer} {entry.status.marker} {entry.display}\n"
    # Renamed between scripts: show where the producer wrote it
    if entry.location_changed:
        st += f"{INDENT}{entry.producer_location}\n"
    if file_details:
        st += _detail("Timestamp:", entry.timestamp)
        st += _detail("Hash:", _hash_value(entry.hash, entry.hash_algorithm))
        st += _detail("Saved out:", entry.saved_out)
        st += _detail("Saved in:", entry.saved_in)
        st += "\n"
    return st


def render_lineage(lineage: Lineage, file_details: bool = False) -> str:
    """Render the lineage report as a single string."""
    report = _section("SCRIPTS", [_render_script(e, file_details) for e in lineage.scripts])
    report += _section("INPUTS", [_render_file(e, file_details) for e in lineage.inputs])
    report += _section("OUTPUTS", [_render_file(e, file_details) for e in lineage.outputs])
    if lineage.shows_exchanges:
        report += _section("EXCHANGES", [_render_exchange(e, file_details) for e in lineage.exchanges])
    return report
