#!/usr/bin/env python3
"""
Server Performance Stats
Prints a point-in-time performance report for this host: CPU, memory,
disk, top processes, OS/kernel, uptime, load, users, failed logins,
listening ports and swap.

Usage:
  server-stats            (or: python3 server_stats.py)

Settings come from SERVER_STATS_* environment variables or a .env file,
see stats_config.py. The report always runs to the closing banner and
exits 0; a section that cannot be collected shows N/A instead.
"""

import sys
import socket
import logging
from datetime import datetime

from stats_config import StatsConfig
from report_formatter import (
    MetricSample,
    closing_banner,
    opening_banner,
    render_section,
)
from collectors import (
    cpu_usage,
    disk_usage,
    memory_usage,
    network_ports,
    scan_processes,
    system_identity,
    user_sessions,
)

logger = logging.getLogger(__name__)


def report_sections(config):
    """(title, collectors) in report order."""
    return [
        ("CPU USAGE", [cpu_usage.collect_cpu_usage]),
        ("MEMORY USAGE", [memory_usage.collect_memory_usage]),
        ("DISK USAGE", [disk_usage.collect_disk_usage]),
        ("TOP 5 PROCESSES BY CPU USAGE", [scan_processes.collect_top_cpu]),
        ("TOP 5 PROCESSES BY MEMORY USAGE", [scan_processes.collect_top_memory]),
        ("ADDITIONAL SYSTEM INFORMATION", [
            system_identity.collect_system_identity,
            user_sessions.collect_logged_in_users,
        ]),
        ("RECENT FAILED LOGIN ATTEMPTS", [user_sessions.collect_failed_logins]),
        ("NETWORK CONNECTIONS", [
            network_ports.collect_listening_ports,
            network_ports.collect_network_interfaces,
            cpu_usage.collect_load_per_core,
        ]),
        ("SWAP USAGE", [memory_usage.collect_swap_usage]),
    ]


def run_collector(collector, config):
    """Run one collector; an unexpected error costs only its own lines."""
    try:
        return collector(config)
    except Exception as e:
        logger.error(f"Collector {collector.__name__} failed: {e}", exc_info=True)
        return MetricSample(collector.__name__, lines=["N/A"], values={"error": str(e)})


def get_hostname():
    try:
        return socket.gethostname()
    except OSError:
        return "unknown"


def setup_logging(config):
    handlers = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        try:
            handlers.append(logging.FileHandler(config.log_file, mode='a'))
        except OSError as e:
            print(f"Cannot open log file {config.log_file}: {e}", file=sys.stderr)
    logging.basicConfig(
        level=config.resolved_log_level(),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def iter_report(config):
    """Report lines, banners included, yielded section by section."""
    yield from opening_banner(get_hostname(), datetime.now())
    for title, collectors in report_sections(config):
        samples = [run_collector(collector, config) for collector in collectors]
        yield from render_section(title, samples)
    yield from closing_banner()


def main():
    config = StatsConfig.from_env()
    setup_logging(config)
    logger.debug(f"Report settings: {config.settings}")

    for line in iter_report(config):
        print(line, flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
