from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

from wifistudy.core.scenario import ScenarioSpec

Position = Tuple[float, float, float]


@dataclass(frozen=True)
class NodePlacement:
    name: str
    role: str
    position: Position


@dataclass(frozen=True)
class WifiConfig:
    ssid: str
    standard: str
    active_probing: bool = False


@dataclass(frozen=True)
class SinkApp:
    port: int
    start_s: float
    stop_s: float
    protocol: str = "tcp"


@dataclass(frozen=True)
class BulkSendApp:
    station_index: int
    remote_port: int
    send_size_bytes: int
    start_s: float
    stop_s: float
    # 0 means unbounded
    max_bytes: int = 0
    protocol: str = "tcp"


@dataclass(frozen=True)
class TopologyPlan:
    """Everything an engine needs to instantiate one scenario world."""

    distance_m: float
    ap: NodePlacement
    stations: Tuple[NodePlacement, ...]
    wifi: WifiConfig
    subnet: str
    sink: SinkApp
    senders: Tuple[BulkSendApp, ...]
    sim_stop_s: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_topology(spec: ScenarioSpec) -> TopologyPlan:
    ap = NodePlacement(name="ap0", role="ap", position=(0.0, 0.0, 0.0))
    stations = tuple(
        NodePlacement(
            name=f"sta{i}",
            role="sta",
            position=(float(spec.distance_m), spec.station_y(i), 0.0),
        )
        for i in range(spec.station_count)
    )
    sink = SinkApp(port=spec.port, start_s=spec.app_start_s, stop_s=spec.app_stop_s)
    senders = tuple(
        BulkSendApp(
            station_index=i,
            remote_port=spec.port,
            send_size_bytes=spec.send_size_bytes,
            start_s=spec.app_start_s + spec.stagger_s * i,
            stop_s=spec.app_stop_s,
        )
        for i in range(spec.station_count)
    )
    return TopologyPlan(
        distance_m=float(spec.distance_m),
        ap=ap,
        stations=stations,
        wifi=WifiConfig(ssid=spec.ssid, standard=spec.wifi_standard),
        subnet=spec.subnet,
        sink=sink,
        senders=senders,
        sim_stop_s=spec.sim_stop_s,
    )
