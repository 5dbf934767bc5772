from __future__ import annotations

from pathlib import Path

from wifistudy.core.types import ScenarioResult
from wifistudy.eval.sink import CSV_HEADER, ResultSink, append_row, ensure_header


def _result(distance: float = 5.0) -> ScenarioResult:
    return ScenarioResult(
        distance_m=distance, throughput_mbps=0.888888, avg_delay_ms=5.3333, loss_percent=5.0
    )


def test_ensure_header_is_idempotent(tmp_path: Path) -> None:
    path = tmp_path / "out" / "results.csv"
    assert ensure_header(path) is True
    assert ensure_header(path) is False
    assert path.read_text(encoding="utf-8") == CSV_HEADER + "\n"


def test_append_row_formats_two_decimals_fixed_point(tmp_path: Path) -> None:
    path = tmp_path / "results.csv"
    ensure_header(path)
    append_row(
        path,
        ScenarioResult(distance_m=5.0, throughput_mbps=1e-7, avg_delay_ms=123456.789, loss_percent=0.0),
    )
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [CSV_HEADER, "5.00,0.00,123456.79,0.00"]


def test_n_appends_give_n_rows_regardless_of_header_calls(tmp_path: Path) -> None:
    sink = ResultSink(tmp_path / "results.csv")
    for i in range(4):
        sink.ensure_header()
        sink.append_row(_result(float(i)))
    sink.ensure_header()

    lines = sink.path.read_text(encoding="utf-8").splitlines()
    assert lines.count(CSV_HEADER) == 1
    assert lines[1:] == [f"{i}.00,0.89,5.33,5.00" for i in range(4)]


def test_existing_file_is_not_inspected_or_repaired(tmp_path: Path) -> None:
    path = tmp_path / "results.csv"
    path.write_text("garbage\n1,2", encoding="utf-8")
    assert ensure_header(path) is False
    assert path.read_text(encoding="utf-8") == "garbage\n1,2"
