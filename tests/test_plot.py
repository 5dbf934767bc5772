from __future__ import annotations

from pathlib import Path

from wifistudy.eval.plot import load_results, plot_results


def _write_csv(path: Path) -> None:
    path.write_text(
        "distance_m,throughput_mbps,avg_delay_ms,packet_loss_percent\n"
        "10.00,20.00,4.00,1.00\n"
        "5.00,30.00,2.00,0.00\n"
        "10.00,22.00,6.00,3.00\n",
        encoding="utf-8",
    )


def test_load_results_averages_repeated_distances(tmp_path: Path) -> None:
    csv_path = tmp_path / "results.csv"
    _write_csv(csv_path)

    df = load_results(csv_path)

    assert list(df["distance_m"]) == [5.0, 10.0]
    assert list(df["throughput_mbps"]) == [30.0, 21.0]
    assert list(df["avg_delay_ms"]) == [2.0, 5.0]


def test_plot_results_writes_png(tmp_path: Path) -> None:
    csv_path = tmp_path / "results.csv"
    _write_csv(csv_path)
    out = tmp_path / "fig" / "metrics.png"

    plot_results(csv_path, out)

    assert out.exists()
    assert out.stat().st_size > 0
