from __future__ import annotations

import importlib
from typing import Dict, Type, Union

from wifistudy.backends.base import SimulationEngine
from wifistudy.backends.stub import StubEngine

# Entries given as "module:Class" are imported on first use so that
# optional simulator bindings are only required when selected.
_REGISTRY: Dict[str, Union[Type[SimulationEngine], str]] = {
    "stub": StubEngine,
    "ns3": "wifistudy.backends.ns3:Ns3Engine",
}


def register_backend(name: str, engine_cls: Union[Type[SimulationEngine], str]) -> None:
    _REGISTRY[name] = engine_cls


def load_backend(name: str) -> Type[SimulationEngine]:
    if name not in _REGISTRY:
        raise KeyError(f"Unknown backend: {name}. Available: {available_backends()}")
    entry = _REGISTRY[name]
    if isinstance(entry, str):
        module_name, _, attr = entry.partition(":")
        entry = getattr(importlib.import_module(module_name), attr)
        _REGISTRY[name] = entry
    return entry


def available_backends() -> list[str]:
    return sorted(_REGISTRY.keys())
