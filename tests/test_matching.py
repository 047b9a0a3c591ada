"""Tests for input classification (matching.py)."""

from provtrace.codes import RecordRole
from provtrace.kernel.matching import classify_inputs, index_by_hash, sort_outputs
from provtrace.kernel.models import FileRecord


def _record(role, script, node_id, location, hash_value, name=None):
    return FileRecord(
        role=role,
        script=script,
        node_id=node_id,
        location=location,
        name=name if name is not None else location.rsplit("/", 1)[-1],
        hash=hash_value,
        hash_algorithm="md5",
        timestamp="2020-03-01T10.00.00EST",
        saved_value=f"data/{node_id}",
        prov_dir=f"/prov/prov_{script}",
    )


def inp(script, node_id, location, hash_value, name=None):
    return _record(RecordRole.INPUT, script, node_id, location, hash_value, name)


def out(script, node_id, location, hash_value):
    return _record(RecordRole.OUTPUT, script, node_id, location, hash_value)


def test_input_written_by_earlier_script_is_satisfied():
    inputs = [inp(1, "d1", "/w/a.csv", "h-a"), inp(2, "d1", "/w/b.csv", "h-b")]
    outputs = [out(1, "d2", "/w/b.csv", "h-b")]

    result = classify_inputs(inputs, outputs)

    assert [r.location for r in result.true_inputs] == ["/w/a.csv"]
    assert [r.location for r in result.satisfied] == ["/w/b.csv"]
    assert all(r.satisfied for r in result.satisfied)
    assert not any(r.satisfied for r in result.true_inputs)


def test_input_written_by_later_script_is_a_true_input():
    inputs = [inp(1, "d1", "/w/a.csv", "h-a")]
    outputs = [out(2, "d1", "/w/a.csv", "h-a")]

    result = classify_inputs(inputs, outputs)

    assert [r.location for r in result.true_inputs] == ["/w/a.csv"]


def test_same_script_same_data_node_is_satisfied():
    """A file written then read back by the same script is not required."""
    inputs = [inp(1, "d3", "/w/tmp.csv", "h-t")]
    outputs = [out(1, "d3", "/w/tmp.csv", "h-t")]

    result = classify_inputs(inputs, outputs)

    assert result.true_inputs == ()


def test_same_script_different_data_node_is_not_satisfied():
    """Read then rewritten with identical content: the file was still required."""
    inputs = [inp(1, "d1", "/w/same.csv", "h-s")]
    outputs = [out(1, "d2", "/w/same.csv", "h-s")]

    result = classify_inputs(inputs, outputs)

    assert [r.node_id for r in result.true_inputs] == ["d1"]


def test_excluded_extension_is_always_satisfied():
    inputs = [inp(1, "d1", "/lib/pkg/data/model.rds", "h-r"), inp(1, "d2", "/w/a.csv", "h-a")]

    result = classify_inputs(inputs, [], excluded_extensions=("rds",))

    assert [r.location for r in result.true_inputs] == ["/w/a.csv"]


def test_exclusion_list_is_narrow():
    inputs = [inp(1, "d1", "/w/model.RDS", "h-r"), inp(1, "d2", "/w/model.rda", "h-d")]

    result = classify_inputs(inputs, [], excluded_extensions=("rds",))

    assert len(result.true_inputs) == 2


def test_true_inputs_sorted_by_script_then_path():
    inputs = [
        inp(2, "d1", "/w/z.csv", "h1"),
        inp(1, "d2", "/w/y.csv", "h2"),
        inp(2, "d3", "/w/a.csv", "h3"),
        inp(1, "d4", "/w/b.csv", "h4"),
    ]

    result = classify_inputs(inputs, [])

    assert [(r.script, r.location) for r in result.true_inputs] == [
        (1, "/w/b.csv"),
        (1, "/w/y.csv"),
        (2, "/w/a.csv"),
        (2, "/w/z.csv"),
    ]


def test_remote_inputs_sort_by_name():
    inputs = [
        inp(1, "d1", "/w/m.csv", "h1"),
        inp(1, "d2", "", "h2", name="http://example.org/data"),
    ]

    result = classify_inputs(inputs, [])

    assert [r.display_name for r in result.true_inputs] == ["/w/m.csv", "http://example.org/data"]


def test_ordering_is_independent_of_collection_order():
    inputs = [inp(1, "d1", "/w/b.csv", "h1"), inp(1, "d2", "/w/a.csv", "h2")]

    first = classify_inputs(inputs, [])
    second = classify_inputs(list(reversed(inputs)), [])

    assert first.true_inputs == second.true_inputs


def test_empty_hash_never_matches():
    inputs = [inp(2, "d1", "/w/a.csv", "")]
    outputs = [out(1, "d1", "/w/a.csv", "")]

    result = classify_inputs(inputs, outputs)

    assert len(result.true_inputs) == 1


def test_index_by_hash_keeps_collection_order():
    outputs = [out(2, "d1", "/w/x", "h"), out(1, "d1", "/w/y", "h"), out(1, "d2", "/w/z", "g")]

    index = index_by_hash(outputs)

    assert [r.location for r in index["h"]] == ["/w/x", "/w/y"]
    assert [r.location for r in index["g"]] == ["/w/z"]


def test_sort_outputs():
    outputs = [out(2, "d1", "/w/c.csv", "h1"), out(1, "d1", "/w/b.csv", "h2"), out(1, "d2", "/w/a.csv", "h3")]

    assert [(r.script, r.location) for r in sort_outputs(outputs)] == [
        (1, "/w/a.csv"),
        (1, "/w/b.csv"),
        (2, "/w/c.csv"),
    ]
