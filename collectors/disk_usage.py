#!/usr/bin/env python3
"""
Disk Usage Collector
Block-device filesystems from df. Pseudo filesystems (tmpfs, overlay,
proc...) do not start with /dev/ and are skipped.
"""
import logging

from command_runner import run_command, first_result
from report_formatter import MetricSample

logger = logging.getLogger(__name__)


def parse_df(text):
    """
    Parse `df -h`/`df -hP` output into a list of filesystem dicts. Only
    rows whose device starts with /dev/ are kept; mount points containing
    spaces are preserved. Returns None if no such row was found.
    """
    filesystems = []
    for line in (text or "").splitlines():
        if not line.startswith("/dev/"):
            continue
        parts = line.split()
        if len(parts) < 6:
            logger.debug(f"Skipping short df row: {line!r}")
            continue
        filesystems.append({
            "device": parts[0],
            "size": parts[1],
            "used": parts[2],
            "available": parts[3],
            "use_percent": parts[4],
            "mount": " ".join(parts[5:]),
            "line": line,
        })
    return filesystems or None


def collect_disk_usage(config, run=run_command):
    timeout = config.command_timeout

    def probe(args):
        def _run():
            result = run(args, timeout=timeout)
            return parse_df(result['stdout']) if result['stdout'] else None
        return _run

    # df exits non-zero when one mount is unreadable but still prints the rest
    _, filesystems = first_result([
        ("df -hP", probe(["df", "-hP"])),
        ("df -h", probe(["df", "-h"])),
    ])

    sample = MetricSample("disk_usage", values={"filesystems": filesystems or []})
    sample.add("Filesystem usage:")
    for fs in filesystems or []:
        sample.add(fs["line"])

    sample.add()
    sample.add("Summary of main partitions:")
    for fs in filesystems or []:
        sample.add(f"{fs['mount']} - Used: {fs['use_percent']} ({fs['used']}/{fs['size']})")
    return sample
