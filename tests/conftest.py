"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed provtrace package.
"""

import hashlib
import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest


def md5_of(content: str) -> str:
    return hashlib.md5(content.encode("utf-8")).hexdigest()


def prov_file(
    name: str,
    location: Optional[str] = None,
    content: Optional[str] = None,
    hash_value: Optional[str] = None,
    file_type: str = "File",
    timestamp: str = "2020-03-01T10.00.00EST",
    value: Optional[str] = None,
) -> Dict:
    """A data entity as written by rdtLite."""
    if hash_value is None:
        hash_value = md5_of(content if content is not None else name)
    return {
        "rdt:name": name,
        "rdt:value": value if value is not None else f"data/{name}",
        "rdt:valType": "{\"container\":\"vector\", \"dimension\":[1], \"type\":[\"character\"]}",
        "rdt:type": file_type,
        "rdt:scope": "undefined",
        "rdt:fromEnv": False,
        "rdt:hash": hash_value,
        "rdt:timestamp": timestamp,
        "rdt:location": location if location is not None else f"/data/{name}",
    }


def build_prov_json(
    script: str,
    prov_directory: str,
    executed_at: str,
    files: Dict[str, Dict],
    used: List[str],
    generated: List[str],
    script_hash: Optional[str] = "abc123",
    hash_algorithm: str = "md5",
    script_timestamp: str = "2020-02-28T09.00.00EST",
) -> Dict:
    environment = {
        "rdt:name": "environment",
        "rdt:architecture": "x86_64",
        "rdt:operatingSystem": "linux-gnu",
        "rdt:language": "R",
        "rdt:langVersion": "R version 3.6.2",
        "rdt:script": script,
        "rdt:scriptTimeStamp": script_timestamp,
        "rdt:totalElapsedTime": "0.5",
        "rdt:sourcedScripts": "",
        "rdt:sourcedScriptTimeStamps": "",
        "rdt:sourcedScriptHashes": "",
        "rdt:workingDirectory": "/data",
        "rdt:provDirectory": prov_directory,
        "rdt:provTimestamp": executed_at,
        "rdt:hashAlgorithm": hash_algorithm,
    }
    if script_hash is not None:
        environment["rdt:scriptHash"] = script_hash

    entity = {"rdt:environment": environment}
    entity.update({f"rdt:{node_id}": attrs for node_id, attrs in files.items()})
    return {
        "prefix": {"prov": "http://www.w3.org/ns/prov#", "rdt": "https://github.com/End-to-end-provenance/ExtendedProvJson/blob/master/JSON-format.md"},
        "agent": {"rdt:a1": {"rdt:tool.name": "rdtLite", "rdt:tool.version": "1.2"}},
        "activity": {
            "rdt:p1": {"rdt:name": Path(script).name, "rdt:type": "Start"},
            "rdt:p2": {"rdt:name": "read/write", "rdt:type": "Operation"},
        },
        "entity": entity,
        "used": {
            f"rdt:dp{i}": {"prov:entity": f"rdt:{node_id}", "prov:activity": "rdt:p2"}
            for i, node_id in enumerate(used, start=1)
        },
        "wasGeneratedBy": {
            f"rdt:pd{i}": {"prov:activity": "rdt:p2", "prov:entity": f"rdt:{node_id}"}
            for i, node_id in enumerate(generated, start=1)
        },
    }


class ProvWriter:
    """Writes prov_<stem>/prov.json records under a provenance directory."""

    def __init__(self, prov_dir: Path):
        self.prov_dir = prov_dir

    def write(
        self,
        script_name: str,
        executed_at: str,
        files: Dict[str, Dict],
        used: List[str],
        generated: List[str],
        script: Optional[str] = None,
        **kwargs,
    ) -> Path:
        stem = script_name[:-2] if script_name.lower().endswith(".r") else script_name
        record_dir = self.prov_dir / f"prov_{stem}"
        record_dir.mkdir(parents=True, exist_ok=True)
        data = build_prov_json(
            script=script if script is not None else f"/data/{script_name}",
            prov_directory=str(record_dir),
            executed_at=executed_at,
            files=files,
            used=used,
            generated=generated,
            **kwargs,
        )
        path = record_dir / "prov.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path


@pytest.fixture
def prov_dir(tmp_path) -> Path:
    path = tmp_path / "prov"
    path.mkdir()
    return path


@pytest.fixture
def prov_writer(prov_dir) -> ProvWriter:
    return ProvWriter(prov_dir)


@pytest.fixture
def two_script_prov(prov_writer):
    """Script A reads a.csv, writes b.csv; script B reads b.csv, writes c.csv."""
    prov_writer.write(
        "script-a.R",
        executed_at="2020-03-01T10.00.00EST",
        files={
            "d1": prov_file("a.csv", content="a"),
            "d2": prov_file("b.csv", content="b"),
        },
        used=["d1"],
        generated=["d2"],
    )
    prov_writer.write(
        "script-b.R",
        executed_at="2020-03-01T11.00.00EST",
        files={
            "d1": prov_file("b.csv", content="b"),
            "d2": prov_file("c.csv", content="c"),
        },
        used=["d1"],
        generated=["d2"],
    )
    return prov_writer
