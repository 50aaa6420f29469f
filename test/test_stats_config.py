#!/usr/bin/env python3
"""
Environment-driven operational settings.
"""

import logging

import server_stats
from stats_config import StatsConfig


def test_defaults():
    config = StatsConfig.from_env(environ={}, dotenv=False)
    assert config.command_timeout == 10
    assert config.cpu_sample_interval == 0.5
    assert config.log_file is None
    assert config.resolved_log_level() == logging.WARNING


def test_environment_overrides():
    config = StatsConfig.from_env(environ={
        "SERVER_STATS_COMMAND_TIMEOUT": "3",
        "SERVER_STATS_CPU_SAMPLE_INTERVAL": "0.2",
        "SERVER_STATS_LOG_LEVEL": "debug",
    }, dotenv=False)
    assert config.command_timeout == 3
    assert config.cpu_sample_interval == 0.2
    assert config.resolved_log_level() == logging.DEBUG


def test_invalid_values_keep_defaults():
    config = StatsConfig.from_env(environ={
        "SERVER_STATS_COMMAND_TIMEOUT": "-4",
        "SERVER_STATS_CPU_SAMPLE_INTERVAL": "soon",
        "SERVER_STATS_LOG_LEVEL": "LOUD",
    }, dotenv=False)
    assert config.command_timeout == 10
    assert config.cpu_sample_interval == 0.5
    assert config.resolved_log_level() == logging.WARNING


def test_report_shape_ignores_environment(fake_run):
    from collectors.scan_processes import collect_top_cpu
    from collectors.user_sessions import collect_failed_logins

    config = StatsConfig.from_env(environ={
        "SERVER_STATS_TOP_N": "3",
        "SERVER_STATS_FAILED_LOGINS": "2",
    }, dotenv=False)
    assert "top_n" not in config.settings
    assert "failed_logins" not in config.settings

    rows = "\n".join(f"user {pid} {pid}.0 1.0 1000 1000 ? S 10:00 0:00 cmd{pid}" for pid in range(1, 8))
    output = "USER PID %CPU %MEM VSZ RSS TTY STAT START TIME COMMAND\n" + rows
    sample = collect_top_cpu(config, run=fake_run({("ps", "aux", "--sort=-%cpu"): output}))
    assert len(sample.lines) == 6

    run = fake_run({("lastb", "-n", "10"): "root ssh:notty 203.0.113.9 Mon Jan 15 03:12"})
    collect_failed_logins(config, run=run, available=lambda name: True)
    assert run.calls == [("lastb", "-n", "10")]

    titles = [title for title, _ in server_stats.report_sections(config)]
    assert "TOP 5 PROCESSES BY CPU USAGE" in titles
    assert "TOP 5 PROCESSES BY MEMORY USAGE" in titles
