"""Tests for script name handling."""

from pathlib import Path

import pytest

from provtrace.errors import ConfigurationError
from provtrace._internal.io.script_list import (
    check_scripts,
    normalize_scripts,
    prov_json_path,
    read_script_list,
    script_stem,
)


def test_single_name_becomes_list():
    assert normalize_scripts("script-1.R") == ["script-1.R"]


def test_list_is_kept_in_order():
    assert normalize_scripts(["b.R", "a.R"]) == ["b.R", "a.R"]


def test_txt_file_is_read_as_script_list(tmp_path):
    list_file = tmp_path / "scripts.txt"
    list_file.write_text("script-1.R\n\n  script-2.R  \n\n", encoding="utf-8")

    assert normalize_scripts(str(list_file)) == ["script-1.R", "script-2.R"]
    assert normalize_scripts([list_file]) == ["script-1.R", "script-2.R"]


def test_empty_script_list_file(tmp_path):
    list_file = tmp_path / "scripts.txt"
    list_file.write_text("", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        read_script_list(list_file)


def test_blank_only_script_list_is_empty(tmp_path):
    list_file = tmp_path / "scripts.txt"
    list_file.write_text("\n   \n", encoding="utf-8")
    with pytest.raises(ConfigurationError) as excinfo:
        normalize_scripts(str(list_file))
    assert "empty" in str(excinfo.value)


def test_missing_script_list_file(tmp_path):
    with pytest.raises(ConfigurationError):
        normalize_scripts(str(tmp_path / "nope.txt"))


def test_empty_list_rejected():
    with pytest.raises(ConfigurationError) as excinfo:
        normalize_scripts([])
    assert "List of script names is empty" in str(excinfo.value)


def test_empty_name_rejected():
    with pytest.raises(ConfigurationError) as excinfo:
        check_scripts(["a.R", ""])
    assert "Script name is empty" in str(excinfo.value)


class TestScriptStem:

    def test_upper_and_lower_suffix(self):
        assert script_stem("analysis.R") == "analysis"
        assert script_stem("analysis.r") == "analysis"

    def test_directory_is_dropped(self):
        assert script_stem("/home/me/work/analysis.R") == "analysis"
        assert script_stem("C:\\work\\analysis.R") == "analysis"

    def test_console(self):
        assert script_stem("console") == "console"

    def test_other_suffix_rejected(self):
        with pytest.raises(ConfigurationError):
            script_stem("analysis.py")
        with pytest.raises(ConfigurationError):
            script_stem(".R")


def test_prov_json_path():
    assert prov_json_path(Path("/prov"), "work/script-1.R") == Path("/prov/prov_script-1/prov.json")
    assert prov_json_path(Path("/prov"), "console") == Path("/prov/prov_console/prov.json")
