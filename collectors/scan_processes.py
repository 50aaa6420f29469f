#!/usr/bin/env python3
"""
Process Scanner
Top processes by CPU and by memory from `ps aux`.

`ps aux --sort` is a procps extension; when it is rejected (busybox, BSD)
plain `ps aux` is used and the rows are ordered here instead.
"""
import logging

from command_runner import run_command, first_result
from report_formatter import MetricSample

logger = logging.getLogger(__name__)

# USER PID %CPU %MEM VSZ RSS TTY STAT START TIME COMMAND
PS_AUX_COLUMNS = 11
TOP_PROCESS_COUNT = 5


def parse_ps_aux(text):
    """
    Parse `ps aux` output into process dicts (header row excluded).
    Returns None if the output has no parsable rows.
    """
    processes = []
    lines = (text or "").splitlines()
    for line in lines[1:]:
        parts = line.split(None, PS_AUX_COLUMNS - 1)
        if len(parts) < PS_AUX_COLUMNS:
            continue
        try:
            cpu = float(parts[2])
            mem = float(parts[3])
            rss = int(parts[5])
        except ValueError:
            continue
        processes.append({
            "user": parts[0],
            "pid": parts[1],
            "cpu": cpu,
            "mem": mem,
            "rss_kib": rss,
            "command": parts[10].split()[0],
            "cpu_text": parts[2],
            "mem_text": parts[3],
        })
    return processes or None


def top_processes(processes, key, limit):
    """Highest `limit` processes by key, descending, stable for ties."""
    return sorted(processes, key=lambda p: p[key], reverse=True)[:limit]


def read_processes(sort_field, run=run_command, timeout=10):
    def probe(args):
        def _run():
            result = run(args, timeout=timeout)
            return parse_ps_aux(result['stdout']) if result['success'] else None
        return _run

    _, processes = first_result([
        (f"ps aux --sort=-{sort_field}", probe(["ps", "aux", f"--sort=-{sort_field}"])),
        ("ps aux", probe(["ps", "aux"])),
    ])
    return processes


def collect_top_cpu(config, run=run_command):
    processes = read_processes("%cpu", run, config.command_timeout)
    sample = MetricSample("top_cpu_processes")
    if processes is None:
        sample.values["processes"] = []
        sample.add("Process list not available")
        return sample

    top = top_processes(processes, "cpu", TOP_PROCESS_COUNT)
    sample.values["processes"] = top
    sample.add("PID       USER      CPU%    COMMAND")
    for proc in top:
        sample.add(f"{proc['pid']:<8} {proc['user']:<10} {proc['cpu_text']:<7} {proc['command']}")
    return sample


def collect_top_memory(config, run=run_command):
    processes = read_processes("%mem", run, config.command_timeout)
    sample = MetricSample("top_memory_processes")
    if processes is None:
        sample.values["processes"] = []
        sample.add("Process list not available")
        return sample

    top = top_processes(processes, "mem", TOP_PROCESS_COUNT)
    sample.values["processes"] = top
    sample.add("PID       USER      MEM%    MEMORY     COMMAND")
    for proc in top:
        memory = f"{proc['rss_kib'] / 1024:.1f}M"
        sample.add(f"{proc['pid']:<8} {proc['user']:<10} {proc['mem_text']:<7} {memory:<10} {proc['command']}")
    return sample
