from wifistudy.core.errors import ScenarioError, WifiStudyError
from wifistudy.core.scenario import ScenarioSpec, enumerate_scenarios
from wifistudy.core.types import FlowRawStats, RawRunStats, ScenarioResult

__all__ = [
    "FlowRawStats",
    "RawRunStats",
    "ScenarioError",
    "ScenarioResult",
    "ScenarioSpec",
    "WifiStudyError",
    "enumerate_scenarios",
]
