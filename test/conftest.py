"""
Shared fixtures: a fake command runner fed with captured tool output, so
collectors can be exercised without the real system utilities.
"""

import pytest

from stats_config import StatsConfig


class FakeRunner:
    """Stands in for command_runner.run_command"""

    def __init__(self, outputs):
        self.outputs = outputs
        self.calls = []

    def __call__(self, cmd, timeout=None):
        self.calls.append(tuple(cmd))
        output = self.outputs.get(tuple(cmd))
        if output is None:
            return {'success': False, 'error': 'command not found', 'stdout': '', 'stderr': '', 'returncode': 127}
        if isinstance(output, dict):
            return output
        return {'success': True, 'stdout': output.strip(), 'stderr': '', 'returncode': 0}


@pytest.fixture
def fake_run():
    return FakeRunner


@pytest.fixture
def config():
    return StatsConfig()
