"""Test combining results into a comparison table."""

import pytest

from benchtable.errors import EmptyResults, RatioColumnCountMismatch, UnknownMetric
from benchtable.report.table import build_table, collect_row_keys, format_ratio, truncate_header
from benchtable.stats import Distribution, Scalar


def parse_rows(table):
    """Split a rendered table into stripped cell lists."""
    return [[cell.strip() for cell in line.split("|")[1:-1]] for line in table.splitlines()]


def two_revision_results():
    return {
        "v2": {
            "bench_a": {"median": 2.0, "25": 1.8, "75": 2.2},
            "time_to_load": {"median": 0.5},
            "bench_b": {"median": 1e-3},
        },
        "v1": {
            "bench_a": {"median": 1.0, "25": 0.9, "75": 1.1},
            "bench_c": {"median": 3e-6},
        },
    }


def test_row_key_order():
    """First-revision order, then extra keys, time_to_load always last."""
    assert collect_row_keys(two_revision_results()) == ["bench_a", "bench_b", "bench_c", "time_to_load"]


def test_time_to_load_moved_from_later_revision():
    results = {"a": {"x": 1.0}, "b": {"time_to_load": 1.0, "y": 2.0}}
    assert collect_row_keys(results) == ["x", "y", "time_to_load"]


def test_line_count():
    table = build_table(two_revision_results())
    assert len(table.splitlines()) == 2 + 4


def test_two_revision_table():
    rows = parse_rows(build_table(two_revision_results()))

    assert rows[0] == ["", "v2", "v1", "v2 / v1"]
    assert rows[2] == ["bench_a", "2 ± 0.4 s", "1 ± 0.2 s", "2 ± 0.57"]
    assert rows[3] == ["bench_b", "1 ms", "", ""]
    assert rows[4] == ["bench_c", "", "3 μs", ""]
    assert rows[5] == ["time_to_load", "500 ms", "", ""]


def test_separator_alignment():
    lines = build_table(two_revision_results()).splitlines()
    cells = lines[1].split("|")[1:-1]
    assert cells[0].startswith(":---") and not cells[0].endswith(":")
    for cell in cells[1:]:
        assert cell.startswith(":---") and cell.endswith(":")


def test_no_ratio_for_single_revision():
    rows = parse_rows(build_table({"v1": {"bench": {"median": 1.0}}}, add_ratio=True))
    assert rows[0] == ["", "v1"]


def test_no_ratio_when_disabled():
    rows = parse_rows(build_table(two_revision_results(), add_ratio=False))
    assert rows[0] == ["", "v2", "v1"]


def test_no_ratio_for_three_revisions():
    results = {"a": {"x": 1.0}, "b": {"x": 2.0}, "c": {"x": 3.0}}
    rows = parse_rows(build_table(results))
    assert rows[0] == ["", "a", "b", "c"]


def test_long_labels_truncated():
    results = {
        "v1.2.3-feature-branch-name": {"bench": {"median": 2.0}},
        "main": {"bench": {"median": 1.0}},
    }
    rows = parse_rows(build_table(results))
    assert rows[0] == ["", "v1.2.3-feature...", "main", "v1.2.3-feature... / main"]
    assert rows[2] == ["bench", "2 s", "1 s", "2"]


def test_truncate_header():
    assert truncate_header("short") == "short"
    assert truncate_header("x" * 14) == "x" * 14
    assert truncate_header("x" * 15) == "x" * 14 + "..."


def test_fixed_unit():
    results = {"v1": {"bench": {"median": 0.0025}}}
    fixed = parse_rows(build_table(results, fixed_unit="ms"))
    auto = parse_rows(build_table(results))
    assert fixed[2][1] == "2.5 ms"
    assert auto[2][1] == "2.5 ms"


def test_time_to_load_ignores_fixed_unit():
    results = {"v1": {"time_to_load": {"median": 0.5}, "bench": {"median": 7200.0}}}
    rows = parse_rows(build_table(results, fixed_unit="h"))
    assert rows[2] == ["bench", "2 h"]
    assert rows[3] == ["time_to_load", "500 ms"]


def test_memory_table():
    results = {
        "new": {"bench": {"median": 1.0, "allocs": 2000, "memory": 2048}},
        "old": {"bench": {"median": 1.0, "allocs": 1000, "memory": 1024}},
    }
    rows = parse_rows(build_table(results, key="memory"))
    assert rows[2] == ["bench", "2 K allocs: 2 KB", "1 K allocs: 1 KB", "2"]


def test_missing_stat_renders_empty():
    results = {"a": {"bench": None}, "b": {"bench": {"median": 1.0}}}
    rows = parse_rows(build_table(results))
    assert rows[2] == ["bench", "", "1 s", ""]


def test_scalar_rows_have_no_ratio():
    results = {"a": {"mem": 2048}, "b": {"mem": 1024}}
    rows = parse_rows(build_table(results))
    assert rows[2] == ["mem", "2 KB", "1 KB", ""]


def test_unknown_metric():
    with pytest.raises(UnknownMetric):
        build_table(two_revision_results(), key="allocations")


def test_empty_results():
    with pytest.raises(EmptyResults):
        build_table({})


def test_revision_without_benchmarks():
    table = build_table({"v1": {}})
    assert len(table.splitlines()) == 2


def test_custom_formatter():
    results = {"v1": {"bench": {"median": 1.0}}}
    rows = parse_rows(build_table(results, formatter=lambda stat, row: row.upper()))
    assert rows[2] == ["bench", "BENCH"]


def test_column_widths_consistent():
    """Every line has the same pipes and length; columns are at least 4 wide."""
    lines = build_table(two_revision_results()).splitlines()
    pipe_counts = {line.count("|") for line in lines}
    assert pipe_counts == {5}
    assert len({len(line) for line in lines}) == 1
    for cell in lines[1].split("|")[1:-1]:
        assert len(cell) >= 4 + 2


def test_ratio_with_uncertainty():
    a = Distribution(median=2.0, q25=1.8, q75=2.2)
    b = Distribution(median=1.0, q25=0.9, q75=1.1)
    assert format_ratio([a, b], "median") == "2 ± 0.57"


def test_ratio_without_quartiles():
    assert format_ratio([Distribution(median=3.0), Distribution(median=2.0)], "median") == "1.5"


def test_ratio_negative_spread_clamped():
    a = Distribution(median=2.0, q25=2.2, q75=1.8)
    b = Distribution(median=1.0, q25=1.1, q75=0.9)
    assert format_ratio([a, b], "median") == "2 ± 0"


def test_ratio_division_by_zero_is_empty():
    assert format_ratio([Distribution(median=1.0), Distribution(median=0.0)], "median") == ""
    a = Distribution(median=1.0, q25=0.9, q75=1.1)
    b = Distribution(median=0.0, q25=0.0, q75=0.0)
    assert format_ratio([a, b], "median") == ""


def test_ratio_missing_key_is_empty():
    assert format_ratio([Distribution(median=1.0), Scalar(1.0)], "median") == ""
    assert format_ratio([Distribution(median=1.0), Distribution(median=1.0)], "memory") == ""


def test_ratio_count_mismatch():
    with pytest.raises(RatioColumnCountMismatch):
        format_ratio([Distribution(median=1.0)], "median")
