from __future__ import annotations

import pytest

from wifistudy.backends.stub import StubEngine
from wifistudy.core.errors import ScenarioError
from wifistudy.core.scenario import ScenarioSpec
from wifistudy.sim.driver import SimulationDriver
from wifistudy.topology.builder import build_topology


def test_driver_assembles_world_in_order_and_destroys_it() -> None:
    engine = StubEngine(sink_total_rx_bytes=42)
    plan = build_topology(ScenarioSpec(distance_m=10.0))

    raw = SimulationDriver(engine).run(plan)

    assert raw.sink_total_rx_bytes == 42
    assert len(raw.flows) == 2
    ops = [name for name, _ in engine.calls]
    assert ops == [
        "create_nodes",
        "create_nodes",
        "install_wifi",
        "set_positions",
        "set_positions",
        "install_internet",
        "install_sink",
        "install_bulk_senders",
        "install_flow_monitor",
        "run_until",
        "collect",
        "destroy",
    ]
    assert ("run_until", 12.0) in engine.calls
    assert list(dict(engine.calls)["install_bulk_senders"]) == pytest.approx([1.0, 1.1, 1.2])
    assert ("set_positions", ((10.0, 0.0, 0.0), (10.0, 3.0, 0.0), (10.0, -3.0, 0.0))) in engine.calls


def test_driver_wraps_engine_failure_and_still_destroys() -> None:
    engine = StubEngine(fail=True)
    plan = build_topology(ScenarioSpec(distance_m=35.0))

    with pytest.raises(ScenarioError) as excinfo:
        SimulationDriver(engine).run(plan)

    assert excinfo.value.distance_m == 35.0
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert engine.destroyed is True
    assert engine.calls[-1] == ("destroy", None)
    assert "collect" not in [name for name, _ in engine.calls]


class _TeardownFailingEngine(StubEngine):
    def destroy(self) -> None:
        super().destroy()
        raise RuntimeError("teardown blew up")


def test_driver_reports_teardown_failure_as_scenario_error() -> None:
    engine = _TeardownFailingEngine()
    plan = build_topology(ScenarioSpec(distance_m=20.0))

    with pytest.raises(ScenarioError, match="teardown failed") as excinfo:
        SimulationDriver(engine).run(plan)

    assert excinfo.value.distance_m == 20.0
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert "collect" in [name for name, _ in engine.calls]


def test_driver_keeps_run_error_when_teardown_also_fails(caplog) -> None:
    engine = _TeardownFailingEngine(fail=True)
    plan = build_topology(ScenarioSpec(distance_m=50.0))

    with pytest.raises(ScenarioError, match="forced failure") as excinfo:
        SimulationDriver(engine).run(plan)

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert "teardown blew up" not in str(excinfo.value)
    assert engine.destroyed is True
    assert any("teardown blew up" in r.getMessage() for r in caplog.records)
