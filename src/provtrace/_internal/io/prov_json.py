"""PROV-JSON loaders and models.

Reads the extended PROV-JSON written by rdtLite and rdt. Only the parts
needed for file lineage are modelled: the environment entity, the data
entities of type File/URL, and the used/wasGeneratedBy relations that
connect them to procedures.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from provtrace.errors import ConfigurationError

logger = logging.getLogger(__name__)

RDT_PREFIX = "rdt:"
ENVIRONMENT_ID = "rdt:environment"
INPUT_FILE_TYPES = {"File", "URL"}
OUTPUT_FILE_TYPES = {"File"}
MISSING_VALUES = {"", "NA"}


def _strip_prefix(node_id: str) -> str:
    return node_id[len(RDT_PREFIX):] if node_id.startswith(RDT_PREFIX) else node_id


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return None if text in MISSING_VALUES else text


class ProvEnvironment(BaseModel):
    """Environment facts recorded for one script execution."""
    script: str
    script_hash: Optional[str] = None
    script_timestamp: str = ""
    prov_timestamp: str = ""
    hash_algorithm: str = "md5"
    prov_directory: str = ""
    working_directory: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ProvFile(BaseModel):
    """A file (or URL) data node read or written by the script."""
    id: str
    name: str
    location: str = ""
    hash: str = ""
    timestamp: str = ""
    value: str = ""  # saved copy, relative to the provenance directory
    type: str = "File"

    model_config = ConfigDict(extra="ignore")


class ProvenanceRecord(BaseModel):
    environment: ProvEnvironment
    inputs: List[ProvFile] = Field(default_factory=list)
    outputs: List[ProvFile] = Field(default_factory=list)
    source_path: Optional[Path] = None

    model_config = ConfigDict(extra="ignore")


def _environment_from_raw(entity: Dict[str, Any]) -> ProvEnvironment:
    def get(label: str) -> Any:
        return entity.get(f"{RDT_PREFIX}{label}")

    return ProvEnvironment(
        script=str(get("script") or ""),
        script_hash=_optional_text(get("scriptHash")),
        script_timestamp=str(get("scriptTimeStamp") or ""),
        prov_timestamp=str(get("provTimestamp") or ""),
        hash_algorithm=str(get("hashAlgorithm") or "md5"),
        prov_directory=str(get("provDirectory") or "").replace("\\", "/").rstrip("/"),
        working_directory=_optional_text(get("workingDirectory")),
    )


def _file_from_raw(node_id: str, entity: Dict[str, Any]) -> ProvFile:
    def get(label: str) -> str:
        value = entity.get(f"{RDT_PREFIX}{label}")
        return "" if value is None else str(value)

    return ProvFile(
        id=_strip_prefix(node_id),
        name=get("name"),
        location=get("location"),
        hash=get("hash"),
        timestamp=get("timestamp"),
        value=get("value"),
        type=get("type"),
    )


def _related_entities(data: Dict[str, Any], relation: str) -> List[str]:
    """Entity ids named by a relation, in first-seen order."""
    seen: Set[str] = set()
    ordered: List[str] = []
    edges = data.get(relation) or {}
    if not isinstance(edges, dict):
        return ordered
    for edge in edges.values():
        if not isinstance(edge, dict):
            continue
        entity_id = edge.get("prov:entity")
        if entity_id and entity_id not in seen:
            seen.add(entity_id)
            ordered.append(entity_id)
    return ordered


def parse_prov_json(data: Dict[str, Any], source_path: Optional[Path] = None) -> ProvenanceRecord:
    """Build a ProvenanceRecord from decoded PROV-JSON."""
    entities = data.get("entity")
    if not isinstance(entities, dict):
        raise ConfigurationError(f"Provenance has no entity section: {source_path}")
    env_entity = entities.get(ENVIRONMENT_ID)
    if not isinstance(env_entity, dict):
        raise ConfigurationError(f"Provenance has no environment entity: {source_path}")

    try:
        environment = _environment_from_raw(env_entity)
        # Data nodes are kept in their recorded order (d1, d2, ...)
        files: Dict[str, ProvFile] = {
            node_id: _file_from_raw(node_id, entity)
            for node_id, entity in entities.items()
            if node_id != ENVIRONMENT_ID and isinstance(entity, dict)
        }
    except ValidationError as e:
        raise ConfigurationError(f"Invalid provenance record {source_path}: {e}") from e

    used = set(_related_entities(data, "used"))
    generated = set(_related_entities(data, "wasGeneratedBy"))

    inputs = [f for node_id, f in files.items() if node_id in used and f.type in INPUT_FILE_TYPES]
    outputs = [f for node_id, f in files.items() if node_id in generated and f.type in OUTPUT_FILE_TYPES]

    return ProvenanceRecord(
        environment=environment,
        inputs=inputs,
        outputs=outputs,
        source_path=source_path,
    )


def load_prov_json(path: Path) -> ProvenanceRecord:
    """Load and parse a prov.json file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read provenance record {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Provenance record is not valid JSON {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Provenance record must be a JSON object: {path}")
    record = parse_prov_json(data, source_path=Path(path))
    logger.debug(
        "Loaded %s: %d input file(s), %d output file(s)",
        path, len(record.inputs), len(record.outputs),
    )
    return record
