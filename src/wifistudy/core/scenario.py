from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

DEFAULT_DISTANCES_M: Tuple[float, ...] = (5.0, 10.0, 20.0, 35.0, 50.0)
DEFAULT_APP_START_S = 1.0
DEFAULT_APP_STOP_S = 10.0
DEFAULT_SIM_STOP_S = 12.0
DEFAULT_STATION_COUNT = 3
DEFAULT_STAGGER_S = 0.1
DEFAULT_STATION_OFFSETS: Tuple[float, ...] = (0.0, 3.0, -3.0)


@dataclass(frozen=True)
class ScenarioSpec:
    """Parameters of one simulation run: a station cluster at ``distance_m`` from the AP."""

    distance_m: float
    app_start_s: float = DEFAULT_APP_START_S
    app_stop_s: float = DEFAULT_APP_STOP_S
    sim_stop_s: float = DEFAULT_SIM_STOP_S
    station_count: int = DEFAULT_STATION_COUNT
    stagger_s: float = DEFAULT_STAGGER_S
    send_size_bytes: int = 1448
    port: int = 5000
    ssid: str = "wifi-distance-ssid"
    subnet: str = "10.1.1.0/24"
    station_offsets: Tuple[float, ...] = DEFAULT_STATION_OFFSETS
    wifi_standard: str = "80211a"

    def __post_init__(self) -> None:
        if not self.app_start_s < self.app_stop_s <= self.sim_stop_s:
            raise ValueError(
                "expected app_start_s < app_stop_s <= sim_stop_s, got "
                f"{self.app_start_s} / {self.app_stop_s} / {self.sim_stop_s}"
            )
        if int(self.station_count) < 1:
            raise ValueError(f"station_count must be >= 1, got {self.station_count}")
        if self.distance_m < 0:
            raise ValueError(f"distance_m must be >= 0, got {self.distance_m}")
        if self.stagger_s < 0:
            raise ValueError(f"stagger_s must be >= 0, got {self.stagger_s}")
        if not self.station_offsets:
            raise ValueError("station_offsets must not be empty")

    @property
    def duration_s(self) -> float:
        return self.app_stop_s - self.app_start_s

    def station_y(self, index: int) -> float:
        return float(self.station_offsets[index % len(self.station_offsets)])


def enumerate_scenarios(
    distances: Iterable[float] = DEFAULT_DISTANCES_M,
    app_start_s: float = DEFAULT_APP_START_S,
    app_stop_s: float = DEFAULT_APP_STOP_S,
    sim_stop_s: float = DEFAULT_SIM_STOP_S,
    station_count: int = DEFAULT_STATION_COUNT,
    stagger_s: float = DEFAULT_STAGGER_S,
    **extra: object,
) -> Iterator[ScenarioSpec]:
    for d in distances:
        yield ScenarioSpec(
            distance_m=float(d),
            app_start_s=float(app_start_s),
            app_stop_s=float(app_stop_s),
            sim_stop_s=float(sim_stop_s),
            station_count=int(station_count),
            stagger_s=float(stagger_s),
            **extra,  # type: ignore[arg-type]
        )
