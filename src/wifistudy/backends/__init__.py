from wifistudy.backends.base import EngineFactory, SimulationEngine
from wifistudy.backends.registry import available_backends, load_backend, register_backend

__all__ = [
    "EngineFactory",
    "SimulationEngine",
    "available_backends",
    "load_backend",
    "register_backend",
]
