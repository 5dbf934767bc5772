from wifistudy.topology.builder import (
    BulkSendApp,
    NodePlacement,
    SinkApp,
    TopologyPlan,
    WifiConfig,
    build_topology,
)

__all__ = [
    "BulkSendApp",
    "NodePlacement",
    "SinkApp",
    "TopologyPlan",
    "WifiConfig",
    "build_topology",
]
