from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from wifistudy.backends.registry import available_backends
from wifistudy.core.scenario import ScenarioSpec, enumerate_scenarios
from wifistudy.runner import FAILURE_POLICIES
from wifistudy.utils.io import deep_merge, load_yaml

DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "configs" / "defaults.yaml"

_SCENARIO_PASSTHROUGH = (
    "send_size_bytes",
    "port",
    "ssid",
    "subnet",
    "station_offsets",
    "wifi_standard",
)


@dataclass(frozen=True)
class ExperimentConfig:
    csv: Path
    verbose: bool
    backend: str
    failure_policy: str
    events: Optional[Path]
    distances_m: Tuple[float, ...]
    scenario_params: Dict[str, Any]
    backend_options: Dict[str, Any] = field(default_factory=dict)

    def scenarios(self) -> List[ScenarioSpec]:
        return list(enumerate_scenarios(self.distances_m, **self.scenario_params))


def load_effective_config(
    config_path: str | Path | None = None, overrides: Dict[str, Any] | None = None
) -> Dict[str, Any]:
    cfg = load_yaml(DEFAULTS_PATH) if DEFAULTS_PATH.exists() else {}
    if config_path is not None:
        exp = load_yaml(config_path)
        if not isinstance(exp, dict):
            raise ValueError(
                f"Invalid config: {config_path} must hold a mapping, got {type(exp).__name__}"
            )
        cfg = deep_merge(cfg, exp)
    if overrides:
        cfg = deep_merge(cfg, {k: v for k, v in overrides.items() if v is not None})
    return cfg


def validate_config(cfg: Dict[str, Any]) -> list[str]:
    errors: list[str] = []

    if not str(cfg.get("csv") or "").strip():
        errors.append("csv must be a non-empty path")

    backend = cfg.get("backend")
    if backend not in available_backends():
        errors.append(f"backend must be one of {available_backends()}, got {backend!r}")

    policy = cfg.get("failure_policy")
    if policy not in FAILURE_POLICIES:
        errors.append(f"failure_policy must be one of {list(FAILURE_POLICIES)}, got {policy!r}")

    scenario = cfg.get("scenario", {})
    if not isinstance(scenario, dict):
        errors.append("'scenario' must be a dict")
        return errors

    distances = scenario.get("distances_m")
    if not isinstance(distances, list) or not distances:
        errors.append("scenario.distances_m must be a non-empty list")
    else:
        try:
            if any(float(d) < 0 for d in distances):
                errors.append("scenario.distances_m must be >= 0")
        except (TypeError, ValueError):
            errors.append("scenario.distances_m must contain numbers")

    try:
        start = float(scenario.get("app_start_s", 0))
        stop = float(scenario.get("app_stop_s", 0))
        sim_stop = float(scenario.get("sim_stop_s", 0))
        if not start < stop <= sim_stop:
            errors.append("expected scenario.app_start_s < app_stop_s <= sim_stop_s")
    except (TypeError, ValueError):
        errors.append("scenario timing values must be numbers")

    try:
        if int(scenario.get("station_count", 0)) < 1:
            errors.append("scenario.station_count must be >= 1")
    except (TypeError, ValueError):
        errors.append("scenario.station_count must be an integer")

    try:
        if float(scenario.get("stagger_s", 0.0)) < 0:
            errors.append("scenario.stagger_s must be >= 0")
    except (TypeError, ValueError):
        errors.append("scenario.stagger_s must be a number")

    offsets = scenario.get("station_offsets", [0.0])
    if not isinstance(offsets, list) or not offsets:
        errors.append("scenario.station_offsets must be a non-empty list")
    elif not all(_is_number(v) for v in offsets):
        errors.append("scenario.station_offsets must contain numbers")

    for key, low, high in (("send_size_bytes", 1, None), ("port", 1, 65535)):
        if key not in scenario:
            continue
        value = scenario[key]
        if not _is_int(value):
            errors.append(f"scenario.{key} must be an integer")
        elif value < low or (high is not None and value > high):
            bound = f"in [{low}, {high}]" if high is not None else f">= {low}"
            errors.append(f"scenario.{key} must be {bound}")

    subnet = scenario.get("subnet")
    if subnet is not None:
        try:
            ipaddress.IPv4Network(str(subnet), strict=True)
        except ValueError as exc:
            errors.append(f"scenario.subnet is invalid: {exc}")

    return errors


def load_experiment_config(
    config_path: str | Path | None = None, overrides: Dict[str, Any] | None = None
) -> ExperimentConfig:
    cfg = load_effective_config(config_path, overrides)
    errors = validate_config(cfg)
    if errors:
        raise ValueError("Invalid config: " + "; ".join(errors))

    scenario = dict(cfg["scenario"])
    params: Dict[str, Any] = {
        "app_start_s": float(scenario["app_start_s"]),
        "app_stop_s": float(scenario["app_stop_s"]),
        "sim_stop_s": float(scenario["sim_stop_s"]),
        "station_count": int(scenario["station_count"]),
        "stagger_s": float(scenario.get("stagger_s", 0.1)),
    }
    for key in _SCENARIO_PASSTHROUGH:
        if key in scenario:
            params[key] = scenario[key]
    if "station_offsets" in params:
        params["station_offsets"] = tuple(float(v) for v in params["station_offsets"])
    for key in ("send_size_bytes", "port"):
        if key in params:
            params[key] = int(params[key])

    events = cfg.get("events")
    backend = str(cfg["backend"])
    return ExperimentConfig(
        csv=Path(cfg["csv"]),
        verbose=bool(cfg.get("verbose", False)),
        backend=backend,
        failure_policy=str(cfg["failure_policy"]),
        events=Path(events) if events else None,
        distances_m=tuple(float(d) for d in scenario["distances_m"]),
        scenario_params=params,
        backend_options=dict(cfg.get(backend) or {}),
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
