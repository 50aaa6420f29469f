#!/usr/bin/env python3
"""
Memory and swap parsing against captured `free` output.
"""

from decimal import Decimal

from collectors.memory_usage import (
    collect_memory_usage,
    collect_swap_usage,
    parse_free_row,
)
from report_formatter import percent_of

FREE_OUTPUT = """
               total        used        free      shared  buff/cache   available
Mem:        16000000     8000000     1000000      200000     7000000     7000000
Swap:        2097148      524287     1572861
"""

FREE_NO_SWAP = """
               total        used        free      shared  buff/cache   available
Mem:        16000000     8000000     1000000      200000     7000000     7000000
Swap:              0           0           0
"""

FREE_HUMAN = """
               total        used        free      shared  buff/cache   available
Mem:            15Gi       7.6Gi       976Mi       195Mi       6.7Gi       6.7Gi
Swap:          2.0Gi       511Mi       1.5Gi
"""


def test_parse_mem_row():
    row = parse_free_row(FREE_OUTPUT, "Mem:")
    assert row["total"] == 16000000
    assert row["used"] == 8000000
    assert row["available"] == 7000000


def test_parse_row_missing_or_garbled():
    assert parse_free_row("", "Mem:") is None
    assert parse_free_row("Mem: lots some", "Mem:") is None


def test_old_free_without_available_column():
    row = parse_free_row("Mem:  1000  250  750  0  10  20", "Mem:")
    assert row["available"] == 20
    row = parse_free_row("Mem:  1000  250  750", "Mem:")
    assert "available" not in row


def test_memory_percentages_end_to_end(config, fake_run):
    run = fake_run({("free",): FREE_OUTPUT, ("free", "-h"): FREE_HUMAN})
    sample = collect_memory_usage(config, run=run)

    assert "Memory Usage: 50.00%" in sample.lines
    assert "Memory Available: 43.75%" in sample.lines
    assert sample.values["used_percent"] == Decimal("50.00")
    # free -h block is echoed first
    assert sample.lines[0].strip().startswith("total")


def test_zero_total_memory_reports_na(config, fake_run):
    run = fake_run({("free",): "Mem: 0 0 0 0 0 0\nSwap: 0 0 0"})
    sample = collect_memory_usage(config, run=run)
    assert "Memory Usage: N/A" in sample.lines
    assert "Memory Available: N/A" in sample.lines


def test_free_missing_reports_na(config, fake_run):
    sample = collect_memory_usage(config, run=fake_run({}))
    assert sample.lines == ["Memory Usage: N/A", "Memory Available: N/A"]


def test_swap_percentage(config, fake_run):
    run = fake_run({("free",): FREE_OUTPUT, ("free", "-h"): FREE_HUMAN})
    sample = collect_swap_usage(config, run=run)
    assert sample.lines[0].startswith("Swap:")
    assert "Swap Usage: 25.00%" in sample.lines
    assert "Total Swap: 2.00 GB" in sample.lines
    assert "Used Swap: 0.50 GB (25.00%)" in sample.lines


def test_no_swap_line_when_swap_disabled(config, fake_run):
    run = fake_run({("free",): FREE_NO_SWAP})
    sample = collect_swap_usage(config, run=run)
    assert not any(line.startswith("Swap Usage") for line in sample.lines)
    assert "Swap: Not configured" in sample.lines


def test_percent_rounding_and_zero_guard():
    assert percent_of(1, 3) == Decimal("33.33")
    assert percent_of(2, 3) == Decimal("66.67")
    assert percent_of(1, 800) == Decimal("0.13")
    assert percent_of(5, 0) is None
    assert percent_of(None, 10) is None
