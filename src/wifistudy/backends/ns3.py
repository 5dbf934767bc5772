from __future__ import annotations

import ipaddress
import logging
from typing import Any, List, Sequence, Tuple

from ns import ns

from wifistudy.backends.base import Position, SimulationEngine
from wifistudy.core.types import FlowRawStats, RawRunStats
from wifistudy.topology.builder import BulkSendApp, SinkApp, WifiConfig

_STANDARDS = {
    "80211a": "WIFI_STANDARD_80211a",
    "80211b": "WIFI_STANDARD_80211b",
    "80211g": "WIFI_STANDARD_80211g",
    "80211n": "WIFI_STANDARD_80211n",
    "80211ac": "WIFI_STANDARD_80211ac",
    "80211ax": "WIFI_STANDARD_80211ax",
}

_VERBOSE_COMPONENTS = ("PacketSink", "BulkSendApplication", "StaWifiMac", "ApWifiMac")

_log = logging.getLogger("wifistudy.backends.ns3")


class Ns3Engine(SimulationEngine):
    """Engine backed by the ns-3 Python bindings.

    ns-3 keeps the simulator and node list as process-global state, so only
    one Ns3Engine may be alive at a time and ``destroy`` must run before the
    next one is created.
    """

    name = "ns3"

    def __init__(self, verbose: bool = False) -> None:
        self._verbose = bool(verbose)
        self._keep: List[Any] = []
        self._flow_helper = None
        self._monitor = None
        if self._verbose:
            for component in _VERBOSE_COMPONENTS:
                ns.LogComponentEnable(component, ns.LOG_LEVEL_INFO)

    def create_nodes(self, count: int) -> Any:
        nodes = ns.NodeContainer()
        nodes.Create(int(count))
        self._keep.append(nodes)
        return nodes

    def install_wifi(self, ap_nodes: Any, sta_nodes: Any, wifi: WifiConfig) -> Tuple[Any, Any]:
        if wifi.standard not in _STANDARDS:
            raise ValueError(f"Unsupported wifi standard: {wifi.standard}")
        channel = ns.YansWifiChannelHelper.Default()
        phy = ns.YansWifiPhyHelper()
        phy.SetChannel(channel.Create())

        helper = ns.WifiHelper()
        helper.SetStandard(getattr(ns, _STANDARDS[wifi.standard]))

        mac = ns.WifiMacHelper()
        ssid = ns.Ssid(wifi.ssid)
        mac.SetType(
            "ns3::StaWifiMac",
            "Ssid",
            ns.SsidValue(ssid),
            "ActiveProbing",
            ns.BooleanValue(wifi.active_probing),
        )
        sta_devices = helper.Install(phy, mac, sta_nodes)

        mac.SetType("ns3::ApWifiMac", "Ssid", ns.SsidValue(ssid))
        ap_devices = helper.Install(phy, mac, ap_nodes)

        self._keep.extend([channel, phy, helper, mac, sta_devices, ap_devices])
        return ap_devices, sta_devices

    def set_positions(self, nodes: Any, positions: Sequence[Position]) -> None:
        alloc = ns.CreateObject[ns.ListPositionAllocator]()
        for x, y, z in positions:
            alloc.Add(ns.Vector(float(x), float(y), float(z)))
        mobility = ns.MobilityHelper()
        mobility.SetPositionAllocator(alloc)
        mobility.SetMobilityModel("ns3::ConstantPositionMobilityModel")
        mobility.Install(nodes)
        self._keep.extend([alloc, mobility])

    def install_internet(
        self,
        ap_nodes: Any,
        sta_nodes: Any,
        ap_devices: Any,
        sta_devices: Any,
        subnet: str,
    ) -> Any:
        net = ipaddress.IPv4Network(subnet, strict=True)
        stack = ns.InternetStackHelper()
        stack.Install(ap_nodes)
        stack.Install(sta_nodes)

        ipv4 = ns.Ipv4AddressHelper()
        ipv4.SetBase(ns.Ipv4Address(str(net.network_address)), ns.Ipv4Mask(str(net.netmask)))
        ap_if = ipv4.Assign(ap_devices)
        sta_if = ipv4.Assign(sta_devices)
        self._keep.extend([stack, ipv4, ap_if, sta_if])
        return ap_if.GetAddress(0)

    def install_sink(self, ap_nodes: Any, sink: SinkApp) -> Any:
        local = ns.InetSocketAddress(ns.Ipv4Address.GetAny(), int(sink.port)).ConvertTo()
        helper = ns.PacketSinkHelper(_socket_factory(sink.protocol), local)
        apps = helper.Install(ap_nodes.Get(0))
        apps.Start(ns.Seconds(sink.start_s))
        apps.Stop(ns.Seconds(sink.stop_s))
        self._keep.extend([helper, apps])
        return apps

    def install_bulk_senders(
        self, sta_nodes: Any, sink_address: Any, senders: Sequence[BulkSendApp]
    ) -> None:
        for sender in senders:
            remote = ns.InetSocketAddress(sink_address, int(sender.remote_port)).ConvertTo()
            helper = ns.BulkSendHelper(_socket_factory(sender.protocol), remote)
            helper.SetAttribute("MaxBytes", ns.UintegerValue(int(sender.max_bytes)))
            helper.SetAttribute("SendSize", ns.UintegerValue(int(sender.send_size_bytes)))
            apps = helper.Install(sta_nodes.Get(sender.station_index))
            apps.Start(ns.Seconds(sender.start_s))
            apps.Stop(ns.Seconds(sender.stop_s))
            self._keep.extend([helper, apps])

    def install_flow_monitor(self) -> None:
        self._flow_helper = ns.FlowMonitorHelper()
        self._monitor = self._flow_helper.InstallAll()

    def run_until(self, stop_s: float) -> None:
        _log.debug("ns3 run until t=%.3fs", stop_s)
        ns.Simulator.Stop(ns.Seconds(float(stop_s)))
        ns.Simulator.Run()

    def collect(self, sink_handle: Any) -> RawRunStats:
        total_rx = 0
        sink = ns.DynamicCast[ns.PacketSink](sink_handle.Get(0))
        if sink:
            total_rx = int(sink.GetTotalRx())

        flows: List[FlowRawStats] = []
        if self._monitor is not None:
            self._monitor.CheckForLostPackets()
            for _flow_id, st in self._monitor.GetFlowStats().items():
                flows.append(
                    FlowRawStats(
                        tx_packets=int(st.txPackets),
                        rx_packets=int(st.rxPackets),
                        lost_packets=int(st.lostPackets),
                        delay_sum_s=float(st.delaySum.GetSeconds()),
                    )
                )
        return RawRunStats(sink_total_rx_bytes=total_rx, flows=tuple(flows))

    def destroy(self) -> None:
        ns.Simulator.Destroy()
        self._keep.clear()
        self._monitor = None
        self._flow_helper = None


def _socket_factory(protocol: str) -> str:
    if protocol == "tcp":
        return "ns3::TcpSocketFactory"
    if protocol == "udp":
        return "ns3::UdpSocketFactory"
    raise ValueError(f"Unsupported transport protocol: {protocol}")
