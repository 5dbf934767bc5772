from __future__ import annotations

import itertools
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from wifistudy.backends.base import EngineFactory, Position, SimulationEngine
from wifistudy.core.types import FlowRawStats, RawRunStats
from wifistudy.topology.builder import BulkSendApp, SinkApp, WifiConfig

DEFAULT_FLOWS: Tuple[FlowRawStats, ...] = (
    FlowRawStats(tx_packets=200, rx_packets=100, lost_packets=10, delay_sum_s=0.5),
    FlowRawStats(tx_packets=100, rx_packets=50, lost_packets=5, delay_sum_s=0.3),
)


class StubEngine(SimulationEngine):
    """Deterministic stand-in engine that reports fixed counters.

    Every capability call is appended to ``calls`` so callers can check the
    order in which a scenario world was assembled and torn down.
    """

    name = "stub"

    def __init__(
        self,
        sink_total_rx_bytes: int = 1_000_000,
        flows: Optional[Iterable[Any]] = None,
        fail: bool = False,
        verbose: bool = False,
        scenario_index: int = 0,
    ) -> None:
        self.sink_total_rx_bytes = int(sink_total_rx_bytes)
        self.flows = tuple(_coerce_flow(f) for f in (DEFAULT_FLOWS if flows is None else flows))
        self.fail = bool(fail)
        self.verbose = bool(verbose)
        self.scenario_index = int(scenario_index)
        self.calls: List[Tuple[str, Any]] = []
        self.destroyed = False
        self._node_ids = itertools.count()

    @classmethod
    def factory(cls, options: Dict[str, Any], verbose: bool = False) -> EngineFactory:
        opts = dict(options)
        fail_on = {int(i) for i in opts.pop("fail_on", [])}
        counter = itertools.count()

        def _make() -> "StubEngine":
            idx = next(counter)
            return cls(verbose=verbose, fail=idx in fail_on, scenario_index=idx, **opts)

        return _make

    def create_nodes(self, count: int) -> List[int]:
        nodes = [next(self._node_ids) for _ in range(int(count))]
        self.calls.append(("create_nodes", count))
        return nodes

    def install_wifi(self, ap_nodes: Any, sta_nodes: Any, wifi: WifiConfig) -> Tuple[Any, Any]:
        self.calls.append(("install_wifi", wifi.ssid))
        return list(ap_nodes), list(sta_nodes)

    def set_positions(self, nodes: Any, positions: Sequence[Position]) -> None:
        self.calls.append(("set_positions", tuple(positions)))

    def install_internet(
        self,
        ap_nodes: Any,
        sta_nodes: Any,
        ap_devices: Any,
        sta_devices: Any,
        subnet: str,
    ) -> str:
        self.calls.append(("install_internet", subnet))
        return subnet.split("/")[0].rsplit(".", 1)[0] + ".1"

    def install_sink(self, ap_nodes: Any, sink: SinkApp) -> str:
        self.calls.append(("install_sink", sink.port))
        return "sink0"

    def install_bulk_senders(
        self, sta_nodes: Any, sink_address: Any, senders: Sequence[BulkSendApp]
    ) -> None:
        self.calls.append(("install_bulk_senders", tuple(s.start_s for s in senders)))

    def install_flow_monitor(self) -> None:
        self.calls.append(("install_flow_monitor", None))

    def run_until(self, stop_s: float) -> None:
        self.calls.append(("run_until", stop_s))
        if self.fail:
            raise RuntimeError(f"stub engine forced failure on scenario {self.scenario_index}")

    def collect(self, sink_handle: Any) -> RawRunStats:
        self.calls.append(("collect", sink_handle))
        return RawRunStats(sink_total_rx_bytes=self.sink_total_rx_bytes, flows=self.flows)

    def destroy(self) -> None:
        self.calls.append(("destroy", None))
        self.destroyed = True


def _coerce_flow(raw: Any) -> FlowRawStats:
    if isinstance(raw, FlowRawStats):
        return raw
    return FlowRawStats(
        tx_packets=int(raw.get("tx_packets", 0)),
        rx_packets=int(raw.get("rx_packets", 0)),
        lost_packets=int(raw.get("lost_packets", 0)),
        delay_sum_s=float(raw.get("delay_sum_s", 0.0)),
    )
