from wifistudy.core.scenario import DEFAULT_DISTANCES_M, ScenarioSpec, enumerate_scenarios
from wifistudy.core.types import FlowRawStats, RawRunStats, ScenarioResult

__all__ = [
    "DEFAULT_DISTANCES_M",
    "FlowRawStats",
    "RawRunStats",
    "ScenarioResult",
    "ScenarioSpec",
    "enumerate_scenarios",
]

__version__ = "0.1.0"
