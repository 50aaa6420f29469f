#!/usr/bin/env python3
"""
Logged-in user listing and failed login history.
"""

from collectors.user_sessions import (
    collect_failed_logins,
    collect_logged_in_users,
    parse_lastb,
    parse_who,
)

WHO_OUTPUT = """
alice    pts/0        2024-01-15 09:12 (192.168.1.50)
bob      tty1         2024-01-15 08:00
carol    pts/1        Jan 15 10:30 (laptop.lan)
"""

LASTB_OUTPUT = """
root     ssh:notty    203.0.113.9      Mon Jan 15 03:12 - 03:12  (00:00)
admin    ssh:notty    198.51.100.4     Mon Jan 15 02:58 - 02:58  (00:00)

btmp begins Mon Jan  1 00:00:01 2024
"""


def test_parse_who():
    sessions = parse_who(WHO_OUTPUT)
    assert len(sessions) == 3
    assert sessions[0] == {
        "user": "alice", "terminal": "pts/0", "login_time": "2024-01-15 09:12", "host": "192.168.1.50",
    }
    assert sessions[1]["host"] is None
    assert sessions[2]["login_time"] == "Jan 15 10:30"


def test_logged_in_users_listing(config, fake_run):
    sample = collect_logged_in_users(config, run=fake_run({("who",): WHO_OUTPUT}))
    assert "  alice - pts/0 2024-01-15 09:12 (from 192.168.1.50)" in sample.lines
    assert "  bob - tty1 2024-01-15 08:00" in sample.lines
    assert sample.lines[-1] == "Total logged in users: 3"


def test_zero_sessions(config, fake_run):
    sample = collect_logged_in_users(config, run=fake_run({("who",): ""}))
    assert sample.lines == ["", "Currently Logged in Users:", "Total logged in users: 0"]


def test_who_unavailable(config, fake_run):
    sample = collect_logged_in_users(config, run=fake_run({}))
    assert "  Unable to retrieve user information" in sample.lines


def test_parse_lastb_drops_trailer():
    records = parse_lastb(LASTB_OUTPUT, 10)
    assert len(records) == 2
    assert all("btmp begins" not in line for line in records)
    assert len(parse_lastb(LASTB_OUTPUT, 1)) == 1


def test_lastb_not_installed(config, fake_run):
    sample = collect_failed_logins(config, run=fake_run({}), available=lambda name: False)
    assert sample.lines == ["lastb command not available"]


def test_lastb_permission_denied(config, fake_run):
    denied = {'success': False, 'stdout': '', 'stderr': 'lastb: cannot open /var/log/btmp: Permission denied',
              'returncode': 1}
    run = fake_run({("lastb", "-n", "10"): denied})
    sample = collect_failed_logins(config, run=run, available=lambda name: True)
    assert sample.lines == ["No failed login attempts found or insufficient permissions"]


def test_lastb_records(config, fake_run):
    run = fake_run({("lastb", "-n", "10"): LASTB_OUTPUT})
    sample = collect_failed_logins(config, run=run, available=lambda name: True)
    assert sample.lines[0] == "Last 10 failed login attempts:"
    assert len(sample.lines) == 3
