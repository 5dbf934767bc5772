from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Sequence, Tuple

from wifistudy.core.types import RawRunStats
from wifistudy.topology.builder import BulkSendApp, SinkApp, WifiConfig

Position = Tuple[float, float, float]
EngineFactory = Callable[[], "SimulationEngine"]


class SimulationEngine(ABC):
    """Capability interface of the external discrete-event simulator.

    Node, device, address and application handles are opaque to the harness;
    they are only ever passed back into the engine that produced them. One
    engine instance owns exactly one scenario world and ``destroy`` tears it
    down completely.
    """

    name = "base"

    @classmethod
    def factory(cls, options: Dict[str, Any], verbose: bool = False) -> EngineFactory:
        def _make() -> "SimulationEngine":
            return cls(verbose=verbose, **options)

        return _make

    @abstractmethod
    def create_nodes(self, count: int) -> Any:
        raise NotImplementedError

    @abstractmethod
    def install_wifi(self, ap_nodes: Any, sta_nodes: Any, wifi: WifiConfig) -> Tuple[Any, Any]:
        raise NotImplementedError

    @abstractmethod
    def set_positions(self, nodes: Any, positions: Sequence[Position]) -> None:
        raise NotImplementedError

    @abstractmethod
    def install_internet(
        self,
        ap_nodes: Any,
        sta_nodes: Any,
        ap_devices: Any,
        sta_devices: Any,
        subnet: str,
    ) -> Any:
        """Install the IP stack on all nodes and return the AP's address."""
        raise NotImplementedError

    @abstractmethod
    def install_sink(self, ap_nodes: Any, sink: SinkApp) -> Any:
        raise NotImplementedError

    @abstractmethod
    def install_bulk_senders(
        self, sta_nodes: Any, sink_address: Any, senders: Sequence[BulkSendApp]
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def install_flow_monitor(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def run_until(self, stop_s: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def collect(self, sink_handle: Any) -> RawRunStats:
        raise NotImplementedError

    @abstractmethod
    def destroy(self) -> None:
        raise NotImplementedError
