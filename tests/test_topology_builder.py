from __future__ import annotations

import json

from wifistudy.core.scenario import ScenarioSpec
from wifistudy.topology.builder import build_topology


def test_build_topology_places_ap_at_origin_and_stations_at_distance() -> None:
    plan = build_topology(ScenarioSpec(distance_m=20.0))

    assert plan.ap.role == "ap"
    assert plan.ap.position == (0.0, 0.0, 0.0)
    assert [s.position for s in plan.stations] == [
        (20.0, 0.0, 0.0),
        (20.0, 3.0, 0.0),
        (20.0, -3.0, 0.0),
    ]
    assert all(s.role == "sta" for s in plan.stations)
    assert plan.wifi.ssid == "wifi-distance-ssid"
    assert plan.wifi.active_probing is False
    assert plan.subnet == "10.1.1.0/24"
    assert plan.sim_stop_s == 12.0


def test_build_topology_staggers_senders_and_shares_stop_time() -> None:
    plan = build_topology(ScenarioSpec(distance_m=5.0, stagger_s=0.25))

    assert plan.sink.port == 5000
    assert (plan.sink.start_s, plan.sink.stop_s) == (1.0, 10.0)
    assert [s.start_s for s in plan.senders] == [1.0, 1.25, 1.5]
    assert {s.stop_s for s in plan.senders} == {10.0}
    assert {s.remote_port for s in plan.senders} == {plan.sink.port}
    assert all(s.max_bytes == 0 for s in plan.senders)
    assert all(s.send_size_bytes == 1448 for s in plan.senders)


def test_build_topology_is_deterministic_and_serializable() -> None:
    spec = ScenarioSpec(distance_m=35.0, station_count=1)
    first = build_topology(spec)
    assert first == build_topology(spec)
    assert len(first.stations) == 1
    payload = json.loads(json.dumps(first.to_dict()))
    assert payload["distance_m"] == 35.0
    assert payload["senders"][0]["station_index"] == 0
