from __future__ import annotations


class WifiStudyError(Exception):
    pass


class ScenarioError(WifiStudyError):
    """Engine failure while running one scenario. Only that scenario is lost."""

    def __init__(self, distance_m: float, message: str) -> None:
        super().__init__(f"scenario distance={distance_m:.2f}m failed: {message}")
        self.distance_m = distance_m
