from __future__ import annotations

from typing import Dict, Iterable

from wifistudy.core.scenario import ScenarioSpec
from wifistudy.core.types import FlowRawStats, RawRunStats, ScenarioResult


def reduce_metrics(
    sink_total_rx_bytes: int, duration_s: float, flows: Iterable[FlowRawStats]
) -> Dict[str, float]:
    """Reduce sink bytes and per-flow counters to throughput, mean delay and loss.

    Every flow the engine reports is summed, including reverse ACK flows.
    Empty denominators give 0.0 rather than an error.
    """
    if duration_s <= 0:
        raise ValueError(f"duration_s must be > 0, got {duration_s}")

    sum_delay_s = 0.0
    rx = 0
    tx = 0
    lost = 0
    for flow in flows:
        sum_delay_s += flow.delay_sum_s
        rx += flow.rx_packets
        tx += flow.tx_packets
        lost += flow.lost_packets

    return {
        "throughput_mbps": (sink_total_rx_bytes * 8.0) / (duration_s * 1e6),
        "avg_delay_ms": (sum_delay_s / rx * 1000.0) if rx > 0 else 0.0,
        "loss_percent": (100.0 * lost / tx) if tx > 0 else 0.0,
    }


def summarize_scenario(spec: ScenarioSpec, raw: RawRunStats) -> ScenarioResult:
    metrics = reduce_metrics(raw.sink_total_rx_bytes, spec.duration_s, raw.flows)
    return ScenarioResult(distance_m=float(spec.distance_m), **metrics)
