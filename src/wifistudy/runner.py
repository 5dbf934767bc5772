from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from wifistudy.backends.base import EngineFactory
from wifistudy.core.errors import ScenarioError
from wifistudy.core.logging import JsonlLogger
from wifistudy.core.scenario import ScenarioSpec
from wifistudy.core.types import ScenarioResult
from wifistudy.eval.metrics import summarize_scenario
from wifistudy.eval.sink import ResultSink
from wifistudy.sim.driver import SimulationDriver
from wifistudy.topology.builder import TopologyPlan, build_topology

FAILURE_POLICIES = ("continue", "abort")


@dataclass
class RunSummary:
    results: List[ScenarioResult] = field(default_factory=list)
    failures: List[Tuple[float, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class ExperimentRunner:
    """Runs scenarios one after another, each in a freshly created engine."""

    def __init__(
        self,
        engine_factory: EngineFactory,
        sink: ResultSink,
        failure_policy: str = "continue",
        verbose: bool = False,
        event_log: JsonlLogger | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if failure_policy not in FAILURE_POLICIES:
            raise ValueError(
                f"Unknown failure policy: {failure_policy}. Available: {list(FAILURE_POLICIES)}"
            )
        self._engine_factory = engine_factory
        self._sink = sink
        self._policy = failure_policy
        self._verbose = verbose
        self._events = event_log or JsonlLogger(None)
        self._log = logger or logging.getLogger("wifistudy.runner")

    def run(self, specs: Iterable[ScenarioSpec]) -> RunSummary:
        summary = RunSummary()
        self._sink.ensure_header()
        for spec in specs:
            plan = build_topology(spec)
            self._events.log(
                "scenario_start", distance_m=spec.distance_m, plan=plan.to_dict()
            )
            try:
                result = self.run_one(spec, plan)
            except ScenarioError as exc:
                summary.failures.append((spec.distance_m, str(exc)))
                self._events.log("scenario_failed", distance_m=spec.distance_m, error=str(exc))
                if self._policy == "abort":
                    self._log.error("%s; aborting run", exc)
                    raise
                self._log.error("%s; skipping", exc)
                continue

            # Sink failures are fatal under every policy.
            self._sink.append_row(result)
            summary.results.append(result)
            self._events.log(
                "scenario_result",
                distance_m=result.distance_m,
                throughput_mbps=result.throughput_mbps,
                avg_delay_ms=result.avg_delay_ms,
                loss_percent=result.loss_percent,
            )
            if self._verbose:
                self._log.info(
                    "Distance %.2f m | Thr %.2f Mbps | AvgDelay %.2f ms | Loss %.2f %%",
                    result.distance_m,
                    result.throughput_mbps,
                    result.avg_delay_ms,
                    result.loss_percent,
                )
        return summary

    def run_one(self, spec: ScenarioSpec, plan: TopologyPlan | None = None) -> ScenarioResult:
        if plan is None:
            plan = build_topology(spec)
        try:
            engine = self._engine_factory()
        except Exception as exc:
            raise ScenarioError(spec.distance_m, f"engine setup failed: {exc}") from exc
        raw = SimulationDriver(engine, logger=self._log.getChild("sim")).run(plan)
        return summarize_scenario(spec, raw)
