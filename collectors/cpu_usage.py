#!/usr/bin/env python3
"""
CPU Usage Collector
Busy/idle percentage from a top snapshot, with vmstat and psutil as
fallback samplers, plus core count and load per core.
"""
import os
import re
import logging
from decimal import Decimal

import psutil

from command_runner import run_command, first_result
from report_formatter import MetricSample, format_percent, format_value, ratio, two_places
from collectors.system_identity import read_load_average, first_load_value

logger = logging.getLogger(__name__)

# Matches "95.4 id," (procps-ng), "95.4%id," (older procps) and "95,4 id" (comma locales)
IDLE_PATTERN = re.compile(r'(\d+(?:[.,]\d+)?)\s*%?\s*id\b')


def _to_float(token):
    try:
        return float(token.replace(",", "."))
    except ValueError:
        return None


def parse_top_idle(text):
    """Idle percentage from the Cpu(s) summary line of `top -bn1`, or None."""
    for line in (text or "").splitlines():
        if "Cpu(s)" not in line:
            continue
        match = IDLE_PATTERN.search(line)
        if match:
            return _to_float(match.group(1))
    return None


def parse_vmstat_idle(text):
    """Idle column of the last sample row of `vmstat 1 2`, or None."""
    lines = [line.split() for line in (text or "").splitlines() if line.strip()]
    idle_index = None
    for tokens in lines:
        if "id" in tokens:
            idle_index = tokens.index("id")
    if idle_index is None or not lines:
        return None
    last = lines[-1]
    if len(last) <= idle_index or "id" in last:
        return None
    return _to_float(last[idle_index])


def parse_core_count(text):
    try:
        cores = int((text or "").strip())
    except ValueError:
        return None
    return cores if cores > 0 else None


def read_core_count(run=run_command, timeout=10):
    def from_nproc():
        result = run(["nproc"], timeout=timeout)
        return parse_core_count(result['stdout']) if result['success'] else None

    _, cores = first_result([
        ("nproc", from_nproc),
        ("os.cpu_count", lambda: os.cpu_count() or None),
    ])
    return cores


def collect_cpu_usage(config, run=run_command):
    timeout = config.command_timeout
    sample = MetricSample("cpu_usage")

    result = run(["top", "-bn1"], timeout=timeout)
    idle = parse_top_idle(result['stdout']) if result['success'] else None
    if idle is not None:
        idle = two_places(idle)
        used = Decimal(100) - idle
        sample.values.update({"used": used, "idle": idle, "source": "top"})
        sample.add(f"CPU Usage: {format_percent(used)}")
        sample.add(f"CPU Idle: {format_percent(idle)}")
        return sample

    logger.info("top did not report an idle figure, sampling CPU another way")

    def from_vmstat():
        vmstat = run(["vmstat", "1", "2"], timeout=timeout)
        return parse_vmstat_idle(vmstat['stdout']) if vmstat['success'] else None

    def from_psutil():
        try:
            return psutil.cpu_times_percent(interval=config.cpu_sample_interval).idle
        except (OSError, AttributeError) as e:
            logger.debug(f"psutil CPU sampling failed: {e}")
            return None

    source, idle = first_result([("vmstat", from_vmstat), ("psutil", from_psutil)])
    if idle is None:
        sample.values["used"] = None
        sample.add("CPU Usage: N/A")
        return sample

    used = Decimal(100) - two_places(idle)
    sample.values.update({"used": used, "idle": two_places(idle), "source": source})
    sample.add(f"CPU Usage (alternative): {format_percent(used)}")
    return sample


def collect_load_per_core(config, run=run_command):
    """CPU core count and one-minute load divided across cores."""
    timeout = config.command_timeout
    cores = read_core_count(run, timeout)
    load1 = first_load_value(read_load_average(run, timeout))
    per_core = ratio(load1, cores)

    sample = MetricSample("load_per_core", values={"cores": cores, "load_per_core": per_core})
    sample.add()
    sample.add(f"CPU Cores: {format_value(cores)}")
    sample.add(f"Load per core: {format_value(per_core)}")
    return sample
