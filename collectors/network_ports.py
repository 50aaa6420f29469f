#!/usr/bin/env python3
"""
Network Connections Collector
Counts listening sockets and reports per-interface traffic totals.

Listening sockets are counted from netstat, then ss, then psutil; the
psutil route reads /proc/net and works without net-tools or iproute2.
"""
import logging

import psutil

from command_runner import run_command, first_result
from report_formatter import MetricSample

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024


def count_listening(text):
    """Number of lines in LISTEN state in netstat/ss output."""
    return sum(1 for line in (text or "").splitlines() if "LISTEN" in line)


def read_listening_count(run=run_command, timeout=10):
    def probe(args):
        def _run():
            result = run(args, timeout=timeout)
            return count_listening(result['stdout']) if result['success'] else None
        return _run

    def from_psutil():
        try:
            return sum(1 for conn in psutil.net_connections(kind="inet")
                       if conn.status == psutil.CONN_LISTEN)
        except (psutil.AccessDenied, OSError) as e:
            logger.debug(f"psutil.net_connections failed: {e}")
            return None

    return first_result([
        ("netstat", probe(["netstat", "-tuln"])),
        ("ss", probe(["ss", "-tuln"])),
        ("psutil", from_psutil),
    ])


def read_interface_traffic():
    """{interface: (rx_mb, tx_mb)} from psutil, or None."""
    try:
        counters = psutil.net_io_counters(pernic=True)
    except OSError as e:
        logger.debug(f"psutil.net_io_counters failed: {e}")
        return None
    return {
        name: (stats.bytes_recv / BYTES_PER_MB, stats.bytes_sent / BYTES_PER_MB)
        for name, stats in sorted(counters.items())
    } or None


def collect_listening_ports(config, run=run_command):
    source, count = read_listening_count(run, config.command_timeout)
    sample = MetricSample("listening_ports", values={"count": count, "source": source})
    sample.add("Active network connections:")
    if count is not None:
        sample.add(f"Listening ports: {count}")
    return sample


def collect_network_interfaces(config, traffic_reader=read_interface_traffic):
    traffic = traffic_reader()
    sample = MetricSample("network_interfaces", values={"interfaces": traffic or {}})
    if not traffic:
        return sample

    sample.add()
    sample.add("Network Interfaces:")
    for name, (rx_mb, tx_mb) in traffic.items():
        sample.add(f"  {name}: RX: {rx_mb:.2f} MB, TX: {tx_mb:.2f} MB")
    return sample
