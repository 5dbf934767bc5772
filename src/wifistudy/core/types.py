from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class FlowRawStats:
    tx_packets: int = 0
    rx_packets: int = 0
    lost_packets: int = 0
    delay_sum_s: float = 0.0


@dataclass(frozen=True)
class RawRunStats:
    sink_total_rx_bytes: int
    flows: Tuple[FlowRawStats, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScenarioResult:
    distance_m: float
    throughput_mbps: float
    avg_delay_ms: float
    loss_percent: float

    def as_row(self) -> Tuple[float, float, float, float]:
        return (self.distance_m, self.throughput_mbps, self.avg_delay_ms, self.loss_percent)
