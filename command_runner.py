#!/usr/bin/env python3
"""
Command Runner
Runs host utilities and reads metadata files for the metric collectors.

Every helper here returns a result instead of raising, so a missing tool or
an unreadable file only ever costs one line of the report.
"""

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def run_command(cmd, timeout=DEFAULT_TIMEOUT):
    """Run a command (argument list) with timeout and error handling"""
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, encoding="utf-8",
                                errors="replace", timeout=timeout)
        return {
            'success': result.returncode == 0,
            'stdout': result.stdout.strip(),
            'stderr': result.stderr.strip(),
            'returncode': result.returncode
        }
    except FileNotFoundError:
        logger.debug(f"Command not found: {cmd[0]}")
        return {'success': False, 'error': 'command not found', 'stdout': '', 'stderr': '', 'returncode': 127}
    except PermissionError:
        logger.debug(f"Permission denied running: {cmd[0]}")
        return {'success': False, 'error': 'permission denied', 'stdout': '', 'stderr': '', 'returncode': 126}
    except subprocess.TimeoutExpired:
        logger.warning(f"Command timed out after {timeout}s: {' '.join(cmd)}")
        return {'success': False, 'error': 'command timeout', 'stdout': '', 'stderr': '', 'returncode': None}
    except OSError as e:
        logger.debug(f"Command failed: {' '.join(cmd)}: {e}")
        return {'success': False, 'error': str(e), 'stdout': '', 'stderr': '', 'returncode': None}


def command_available(name):
    """Return True if an executable with this name is on PATH."""
    return shutil.which(name) is not None


def read_text_file(path):
    """Return the stripped contents of a text file, or None if unreadable."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="ignore").strip()
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return None


def first_result(probes):
    """
    Try each probe in order and return (label, value) for the first one that
    produced a value. Probes are (label, callable) pairs; a callable signals
    failure by returning None. Returns (None, None) when every probe fails.
    """
    for label, probe in probes:
        value = probe()
        if value is not None:
            return label, value
        logger.debug(f"Probe '{label}' produced no value")
    return None, None
