"""Pytest configuration and shared fixtures."""

import io
import os
import logging
import subprocess
from typing import List, Optional
from unittest.mock import Mock, patch

import pytest

from maps_mcp_server.config import AppConfig, ExecutorConfig
from maps_mcp_server.executor import CommandExecutor
from maps_mcp_server.translator import CommandTranslator

# Disable logging during tests to reduce noise
logging.disable(logging.CRITICAL)


@pytest.fixture(autouse=True)
def clean_env():
    """Clean environment variables before each test."""
    env_vars_to_clean = [
        "MAPS_MCP_OSASCRIPT_COMMAND",
        "MAPS_MCP_OPEN_COMMAND",
        "MAPS_MCP_MAX_OUTPUT_BYTES",
        "MAPS_MCP_COMMAND_TIMEOUT",
        "MAPS_MCP_DRY_RUN",
        "MAPS_MCP_APP_URL_BASE",
        "MAPS_MCP_WEB_URL_BASE",
        "LOG_LEVEL",
    ]

    original_values = {}
    for var in env_vars_to_clean:
        original_values[var] = os.environ.get(var)
        if var in os.environ:
            del os.environ[var]

    yield

    for var, value in original_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


class FakePopen:
    """Stand-in for ``subprocess.Popen`` that records shell commands.

    Tests set ``stdout``, ``stderr``, ``returncode``, ``spawn_error`` or
    ``timeout`` before the code under test runs.
    """

    def __init__(self):
        self.stdout: bytes = b""
        self.stderr: bytes = b""
        self.returncode: int = 0
        self.spawn_error: Optional[Exception] = None
        self.timeout: bool = False
        self.commands: List[str] = []
        self.processes: List[Mock] = []

    def __call__(self, command, shell=False, stdout=None, stderr=None, **kwargs):
        if self.spawn_error is not None:
            raise self.spawn_error

        self.commands.append(command)
        if stderr is not None and self.stderr:
            stderr.write(self.stderr)

        process = Mock()
        process.stdout = io.BytesIO(self.stdout)
        if self.timeout:
            process.wait.side_effect = [subprocess.TimeoutExpired(command, 1), -9]
        else:
            process.wait.return_value = self.returncode
        self.processes.append(process)
        return process


@pytest.fixture
def fake_popen():
    """Patch process spawning so no real osascript/open ever runs."""
    fake = FakePopen()
    with patch("maps_mcp_server.executor.subprocess.Popen", new=fake):
        yield fake


@pytest.fixture
def translator():
    return CommandTranslator()


@pytest.fixture
def executor():
    return CommandExecutor(ExecutorConfig())


@pytest.fixture
def app_config():
    return AppConfig()
