from __future__ import annotations

import os
from pathlib import Path

from wifistudy.core.types import ScenarioResult

CSV_HEADER = "distance_m,throughput_mbps,avg_delay_ms,packet_loss_percent"


def ensure_header(path: str | Path) -> bool:
    """Create ``path`` with the header line if it does not exist yet.

    Only existence is checked; an existing file is never read or repaired.
    Returns True when the file was created.
    """
    p = Path(path)
    if p.exists():
        return False
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8", newline="") as f:
        f.write(CSV_HEADER + "\n")
    return True


def format_row(result: ScenarioResult) -> str:
    return ",".join(f"{float(v):.2f}" for v in result.as_row())


def append_row(path: str | Path, result: ScenarioResult) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8", newline="") as f:
        f.write(format_row(result) + "\n")
        f.flush()
        os.fsync(f.fileno())


class ResultSink:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def ensure_header(self) -> bool:
        return ensure_header(self.path)

    def append_row(self, result: ScenarioResult) -> None:
        append_row(self.path, result)
