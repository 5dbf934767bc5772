from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd

_PANELS = (
    ("throughput_mbps", "Throughput (Mbps)"),
    ("avg_delay_ms", "Avg Delay (ms)"),
    ("packet_loss_percent", "Packet Loss (%)"),
)


def load_results(input_csv: str | Path) -> pd.DataFrame:
    df = pd.read_csv(input_csv)
    missing = [c for c in ("distance_m", *(c for c, _ in _PANELS)) if c not in df.columns]
    if missing:
        raise ValueError(f"{input_csv}: missing columns {missing}")
    # Repeated runs append rows for the same distance; average them.
    return df.groupby("distance_m", as_index=False).mean().sort_values("distance_m")


def plot_results(input_csv: str | Path, out_png: str | Path) -> None:
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("matplotlib is required for plotting") from exc

    df = load_results(input_csv)
    fig, axes = plt.subplots(1, len(_PANELS), figsize=(12, 3.5))
    for ax, (column, label) in zip(axes, _PANELS):
        ax.plot(df["distance_m"], df[column], marker="o")
        ax.set_xlabel("Distance (m)")
        ax.set_ylabel(label)
        ax.grid(True, alpha=0.3)
    fig.tight_layout()
    Path(out_png).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_png, dpi=150)
    plt.close(fig)


def main() -> int:
    parser = argparse.ArgumentParser(description="Plot metrics against AP-station distance")
    parser.add_argument("--in", dest="input_csv", required=True)
    parser.add_argument("--out", dest="out_png", required=True)
    args = parser.parse_args()
    plot_results(args.input_csv, args.out_png)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
