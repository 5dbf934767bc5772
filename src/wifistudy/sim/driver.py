from __future__ import annotations

import logging

from wifistudy.backends.base import SimulationEngine
from wifistudy.core.errors import ScenarioError
from wifistudy.core.types import RawRunStats
from wifistudy.topology.builder import TopologyPlan


class SimulationDriver:
    def __init__(self, engine: SimulationEngine, logger: logging.Logger | None = None) -> None:
        self._engine = engine
        self._log = logger or logging.getLogger("wifistudy.sim")

    def run(self, plan: TopologyPlan) -> RawRunStats:
        """Assemble ``plan`` inside the engine, run it to ``plan.sim_stop_s`` and collect counters.

        The engine world is destroyed before returning, whether the run
        succeeded or not. Any engine error, teardown included, surfaces as
        ``ScenarioError``; when both the run and the teardown fail the run's
        error is the one raised.
        """
        try:
            raw = self._assemble_and_run(plan)
        except Exception as exc:
            self._teardown(plan, run_failed=True)
            if isinstance(exc, ScenarioError):
                raise
            raise ScenarioError(plan.distance_m, f"{type(exc).__name__}: {exc}") from exc
        self._teardown(plan, run_failed=False)
        return raw

    def _assemble_and_run(self, plan: TopologyPlan) -> RawRunStats:
        engine = self._engine
        ap_nodes = engine.create_nodes(1)
        sta_nodes = engine.create_nodes(len(plan.stations))
        ap_devices, sta_devices = engine.install_wifi(ap_nodes, sta_nodes, plan.wifi)
        engine.set_positions(ap_nodes, [plan.ap.position])
        engine.set_positions(sta_nodes, [s.position for s in plan.stations])
        sink_address = engine.install_internet(
            ap_nodes, sta_nodes, ap_devices, sta_devices, plan.subnet
        )
        sink = engine.install_sink(ap_nodes, plan.sink)
        engine.install_bulk_senders(sta_nodes, sink_address, plan.senders)
        engine.install_flow_monitor()

        self._log.debug(
            "running distance=%.2fm stations=%d until t=%.2fs",
            plan.distance_m,
            len(plan.stations),
            plan.sim_stop_s,
        )
        engine.run_until(plan.sim_stop_s)
        return engine.collect(sink)

    def _teardown(self, plan: TopologyPlan, run_failed: bool) -> None:
        try:
            self._engine.destroy()
        except Exception as exc:
            if run_failed:
                self._log.error(
                    "teardown after failed run also failed: distance=%.2fm %s: %s",
                    plan.distance_m,
                    type(exc).__name__,
                    exc,
                )
                return
            raise ScenarioError(
                plan.distance_m, f"teardown failed: {type(exc).__name__}: {exc}"
            ) from exc
