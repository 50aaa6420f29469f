#!/usr/bin/env python3
"""
Memory and Swap Collector
Reads the Mem: and Swap: rows of `free` (KiB by default) and derives
usage percentages. The human readable `free -h` output is echoed into the
report as-is.
"""
import logging

from command_runner import run_command
from report_formatter import MetricSample, format_percent, percent_of

logger = logging.getLogger(__name__)

MEM_FIELDS = ("total", "used", "free", "shared", "buff_cache", "available")
SWAP_FIELDS = ("total", "used", "free")
KIB_PER_GIB = 1024 * 1024


def parse_free_row(text, label):
    """
    Parse one row of `free` output ('Mem:' or 'Swap:') into a dict of ints.
    Columns missing from older procps versions (e.g. available) are left out.
    Returns None when the row is absent or not numeric.
    """
    fields = MEM_FIELDS if label == "Mem:" else SWAP_FIELDS
    for line in (text or "").splitlines():
        parts = line.split()
        if not parts or parts[0] != label:
            continue
        values = {}
        for name, raw in zip(fields, parts[1:]):
            try:
                values[name] = int(raw)
            except ValueError:
                return None
        if "total" not in values or "used" not in values:
            return None
        return values
    return None


def find_row(text, label):
    for line in (text or "").splitlines():
        if line.startswith(label):
            return line
    return None


def kib_to_gib(kib):
    return kib / KIB_PER_GIB


def memory_percentages(row):
    """(used%, available%) for a parsed Mem: row; None entries when total is 0."""
    return percent_of(row.get("used"), row.get("total")), percent_of(row.get("available"), row.get("total"))


def collect_memory_usage(config, run=run_command):
    timeout = config.command_timeout
    sample = MetricSample("memory_usage")

    human = run(["free", "-h"], timeout=timeout)
    if human['success'] and human['stdout']:
        sample.lines.extend(human['stdout'].splitlines())
        sample.add()

    result = run(["free"], timeout=timeout)
    row = parse_free_row(result['stdout'], "Mem:") if result['success'] else None
    if row is None:
        logger.debug(f"free gave no Mem: row ({result.get('error') or result['stderr']})")
        sample.values.update({"used_percent": None, "available_percent": None})
        sample.add("Memory Usage: N/A")
        sample.add("Memory Available: N/A")
        return sample

    used_pct, avail_pct = memory_percentages(row)
    sample.values.update(row)
    sample.values.update({"used_percent": used_pct, "available_percent": avail_pct})

    sample.add(f"Memory Usage: {format_percent(used_pct)}")
    sample.add(f"Memory Available: {format_percent(avail_pct)}")
    if row["total"] > 0:
        sample.add(f"Total Memory: {kib_to_gib(row['total']):.2f} GB")
        sample.add(f"Used Memory: {kib_to_gib(row['used']):.2f} GB")
        if "available" in row:
            sample.add(f"Available Memory: {kib_to_gib(row['available']):.2f} GB")
    return sample


def collect_swap_usage(config, run=run_command):
    """Swap row plus a usage percentage when any swap is configured."""
    timeout = config.command_timeout
    sample = MetricSample("swap_usage")

    human = run(["free", "-h"], timeout=timeout)
    human_row = find_row(human['stdout'], "Swap:") if human['success'] else None
    if human_row:
        sample.add(human_row)

    result = run(["free"], timeout=timeout)
    row = parse_free_row(result['stdout'], "Swap:") if result['success'] else None
    if row is None:
        sample.values["used_percent"] = None
        sample.add("Swap Usage: N/A")
        return sample

    sample.values.update(row)
    if row["total"] <= 0:
        sample.values["used_percent"] = None
        sample.add("Swap: Not configured")
        return sample

    used_pct = percent_of(row["used"], row["total"])
    sample.values["used_percent"] = used_pct
    sample.add(f"Swap Usage: {format_percent(used_pct)}")
    sample.add(f"Total Swap: {kib_to_gib(row['total']):.2f} GB")
    sample.add(f"Used Swap: {kib_to_gib(row['used']):.2f} GB ({format_percent(used_pct)})")
    return sample
