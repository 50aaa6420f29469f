#!/usr/bin/env python3
"""
User Sessions Collector
Logged-in users from `who` and recent failed logins from `lastb`.

lastb reads /var/log/btmp, which is normally root-only; a permission error
is reported in the section rather than treated as a failure of the run.
"""
import logging

from command_runner import run_command, command_available
from report_formatter import MetricSample

logger = logging.getLogger(__name__)

FAILED_LOGIN_LIMIT = 10


def parse_who(text):
    """
    Parse `who` output into session dicts with user, terminal, login time
    and origin host (None for local sessions).
    """
    sessions = []
    for line in (text or "").splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        host = None
        rest = parts[2:]
        if rest and rest[-1].startswith("(") and rest[-1].endswith(")"):
            host = rest[-1][1:-1]
            rest = rest[:-1]
        sessions.append({
            "user": parts[0],
            "terminal": parts[1],
            "login_time": " ".join(rest),
            "host": host,
        })
    return sessions


def format_session(session):
    line = f"  {session['user']} - {session['terminal']} {session['login_time']}".rstrip()
    if session["host"]:
        line += f" (from {session['host']})"
    return line


def parse_lastb(text, limit):
    """Failed login records from lastb, without blanks and the btmp trailer."""
    records = []
    for line in (text or "").splitlines():
        if not line.strip() or line.startswith("btmp begins"):
            continue
        records.append(line)
    return records[:limit]


def collect_logged_in_users(config, run=run_command):
    sample = MetricSample("logged_in_users")
    sample.add()
    sample.add("Currently Logged in Users:")

    result = run(["who"], timeout=config.command_timeout)
    if not result['success']:
        logger.debug(f"who failed: {result.get('error') or result['stderr']}")
        sample.values["count"] = None
        sample.add("  Unable to retrieve user information")
        return sample

    sessions = parse_who(result['stdout'])
    sample.values.update({"sessions": sessions, "count": len(sessions)})
    for session in sessions:
        sample.add(format_session(session))
    sample.add(f"Total logged in users: {len(sessions)}")
    return sample


def collect_failed_logins(config, run=run_command, available=command_available):
    limit = FAILED_LOGIN_LIMIT
    sample = MetricSample("failed_logins")

    if not available("lastb"):
        sample.values["records"] = None
        sample.add("lastb command not available")
        return sample

    result = run(["lastb", "-n", str(limit)], timeout=config.command_timeout)
    records = parse_lastb(result['stdout'], limit) if result['success'] else []
    sample.values["records"] = records
    if not records:
        sample.add("No failed login attempts found or insufficient permissions")
        return sample

    sample.add(f"Last {limit} failed login attempts:")
    sample.lines.extend(records)
    return sample
