#!/usr/bin/env python3
"""
System Identity
OS name, kernel version, uptime, load average and boot time.

OS name sources, in order:
- /etc/os-release PRETTY_NAME (NAME + VERSION when PRETTY_NAME is missing)
- /etc/redhat-release contents
- /etc/debian_version, reported as "Debian <version>"
- uname -s / uname -r
"""
import os
import re
import logging
import platform
from datetime import datetime

import psutil

from command_runner import run_command, read_text_file, first_result
from report_formatter import MetricSample, format_value

logger = logging.getLogger(__name__)

OS_RELEASE = "/etc/os-release"
REDHAT_RELEASE = "/etc/redhat-release"
DEBIAN_VERSION = "/etc/debian_version"

LOAD_AVERAGE_PATTERN = re.compile(r'load averages?:\s*(.*)$')


def parse_os_release(text):
    """Return the PRETTY_NAME from os-release content, or None."""
    if not text:
        return None
    data = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = value.strip().strip('"').strip("'")

    if data.get("PRETTY_NAME"):
        return data["PRETTY_NAME"]
    name = " ".join(v for v in (data.get("NAME"), data.get("VERSION")) if v)
    return name or None


def parse_uptime_pretty(text):
    """`uptime -p` output such as 'up 3 days, 4 hours'."""
    text = (text or "").strip()
    if not text.startswith("up"):
        return None
    return text


def parse_uptime_plain(text):
    """
    Duration from classic `uptime` output: the text between 'up ' and the
    first comma, e.g. '10:01:02 up 3 days,  2:04,  1 user' -> '3 days'.
    """
    if not text or "up " not in text:
        return None
    duration = text.split("up ", 1)[1].split(",", 1)[0].strip()
    return duration or None


def parse_load_average(text):
    """Raw load average text after the 'load average:' label, or None."""
    for line in (text or "").splitlines():
        match = LOAD_AVERAGE_PATTERN.search(line)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def first_load_value(load_text):
    """One-minute load from '0.52, 0.58, 0.59' (or '0.52 0.58 0.59')."""
    if not load_text:
        return None
    token = re.split(r'[,\s]+', load_text.strip())[0]
    try:
        return float(token)
    except ValueError:
        return None


def read_load_average(run=run_command, timeout=10):
    """Load average text from uptime, else os.getloadavg()."""
    def from_uptime():
        result = run(["uptime"], timeout=timeout)
        return parse_load_average(result['stdout']) if result['success'] else None

    def from_getloadavg():
        try:
            return ", ".join(f"{value:.2f}" for value in os.getloadavg())
        except OSError:
            return None

    _, load_text = first_result([("uptime", from_uptime), ("getloadavg", from_getloadavg)])
    return load_text


def read_os_name(run=run_command, timeout=10, paths=None):
    """Walk the OS identity sources until one answers."""
    paths = paths or {}
    os_release = paths.get("os_release", OS_RELEASE)
    redhat_release = paths.get("redhat_release", REDHAT_RELEASE)
    debian_version = paths.get("debian_version", DEBIAN_VERSION)

    def from_debian():
        version = read_text_file(debian_version)
        return f"Debian {version}" if version else None

    def from_uname():
        system = run(["uname", "-s"], timeout=timeout)
        release = run(["uname", "-r"], timeout=timeout)
        if system['success'] and release['success']:
            return f"{system['stdout']} {release['stdout']}"
        return f"{platform.system()} {platform.release()}".strip() or None

    _, name = first_result([
        ("os-release", lambda: parse_os_release(read_text_file(os_release))),
        ("redhat-release", lambda: read_text_file(redhat_release) or None),
        ("debian_version", from_debian),
        ("uname", from_uname),
    ])
    return name


def read_kernel_version(run=run_command, timeout=10):
    def from_uname():
        result = run(["uname", "-r"], timeout=timeout)
        return result['stdout'] if result['success'] and result['stdout'] else None

    _, kernel = first_result([
        ("uname", from_uname),
        ("platform", lambda: platform.release() or None),
    ])
    return kernel


def read_uptime(run=run_command, timeout=10):
    def pretty():
        result = run(["uptime", "-p"], timeout=timeout)
        return parse_uptime_pretty(result['stdout']) if result['success'] else None

    def plain():
        result = run(["uptime"], timeout=timeout)
        return parse_uptime_plain(result['stdout']) if result['success'] else None

    _, uptime = first_result([("uptime -p", pretty), ("uptime", plain)])
    return uptime


def read_boot_time():
    try:
        return datetime.fromtimestamp(psutil.boot_time()).strftime("%Y-%m-%d %H:%M:%S")
    except (OSError, RuntimeError) as e:
        logger.debug(f"Boot time unavailable: {e}")
        return None


def collect_system_identity(config, run=run_command, paths=None):
    """OS, kernel, uptime, load average and boot time lines."""
    timeout = config.command_timeout
    os_name = read_os_name(run, timeout, paths)
    kernel = read_kernel_version(run, timeout)
    uptime = read_uptime(run, timeout)
    load_average = read_load_average(run, timeout)
    boot_time = read_boot_time()

    sample = MetricSample("system_identity", values={
        "os_name": os_name,
        "kernel": kernel,
        "uptime": uptime,
        "load_average": load_average,
        "boot_time": boot_time,
    })
    sample.add("OS Version:")
    sample.add(f"  {format_value(os_name)}")
    sample.add(f"Kernel: {format_value(kernel)}")
    sample.add(f"Uptime: {format_value(uptime)}")
    sample.add(f"Load Average: {format_value(load_average)}")
    if boot_time:
        sample.add(f"Boot time: {boot_time}")
    return sample
