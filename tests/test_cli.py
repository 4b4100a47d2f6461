"""Unit tests for CLI interface."""

import json

import pytest
from unittest.mock import patch
from click.testing import CliRunner

from maps_mcp_server.cli import cli
from maps_mcp_server.config import AppConfig, ExecutorConfig


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def mock_setup_logging():
    with patch("maps_mcp_server.cli.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def mock_load_config():
    with patch("maps_mcp_server.cli.load_config") as mock_load:
        mock_load.return_value = AppConfig()
        yield mock_load


class TestCLIInitialization:
    def test_log_level_option_wins(self, runner, mock_load_config, mock_setup_logging):
        result = runner.invoke(cli, ["--log-level", "DEBUG", "tools"])

        assert result.exit_code == 0
        mock_load_config.assert_called_once_with(None)
        mock_setup_logging.assert_called_once_with("DEBUG")

    def test_config_log_level_used_by_default(self, runner, mock_load_config, mock_setup_logging):
        mock_load_config.return_value = AppConfig(log_level="WARNING")

        runner.invoke(cli, ["tools"])

        mock_setup_logging.assert_called_once_with("WARNING")

    def test_config_error(self, runner, mock_load_config):
        mock_load_config.side_effect = Exception("Config error")

        result = runner.invoke(cli, ["tools"])

        assert result.exit_code == 1
        assert "❌ Error: Config error" in result.output


class TestToolsCommand:
    def test_lists_tools_by_category(self, runner, mock_load_config):
        result = runner.invoke(cli, ["tools"])

        assert result.exit_code == 0
        assert "navigation_tools:" in result.output
        assert "maps_get_directions - Get directions between two locations (to)" in result.output
        assert "maps_open - Open the Apple Maps app (no required arguments)" in result.output

    def test_json_output(self, runner, mock_load_config):
        result = runner.invoke(cli, ["tools", "--json"])

        schemas = json.loads(result.output)
        assert result.exit_code == 0
        assert [schema["name"] for schema in schemas][:2] == ["maps_open", "maps_search"]
        assert len(schemas) == 8


class TestOperationCommands:
    def test_search_dry_run(self, runner, mock_load_config, fake_popen):
        result = runner.invoke(cli, ["search", "coffee shops", "--dry-run"])

        assert result.exit_code == 0
        assert result.output == (
            "Command: open 'maps://?q=coffee%20shops'\n"
            "Searching for: coffee shops\n"
        )
        assert fake_popen.commands == []

    def test_search_executes(self, runner, mock_load_config, fake_popen):
        result = runner.invoke(cli, ["search", "coffee"])

        assert result.exit_code == 0
        assert result.output == "Searching for: coffee\n"
        assert fake_popen.commands == ["open 'maps://?q=coffee'"]

    def test_open_dry_run(self, runner, mock_load_config):
        result = runner.invoke(cli, ["open", "--dry-run"])

        assert "Command: osascript -e 'tell application \"Maps\" to activate'" in result.output
        assert "Apple Maps opened" in result.output

    def test_directions(self, runner, mock_load_config):
        result = runner.invoke(
            cli, ["directions", "Pier 39", "--from", "Union Square", "--mode", "transit", "--dry-run"]
        )

        assert result.exit_code == 0
        assert "saddr=Union%20Square&daddr=Pier%2039&dirflg=r" in result.output
        assert "Getting transit directions from Union Square to Pier 39" in result.output

    def test_directions_rejects_unknown_mode(self, runner, mock_load_config):
        result = runner.invoke(cli, ["directions", "Home", "--mode", "flying"])

        assert result.exit_code == 2

    def test_show(self, runner, mock_load_config):
        result = runner.invoke(cli, ["show", "Ferry Building", "--dry-run"])

        assert "Command: open 'maps://?address=Ferry%20Building'" in result.output
        assert "Showing: Ferry Building" in result.output

    def test_coordinates(self, runner, mock_load_config):
        result = runner.invoke(
            cli, ["coordinates", "--lat", "48.8584", "--lon", "2.2945", "--label", "Eiffel Tower", "--dry-run"]
        )

        assert "maps://?ll=48.8584,2.2945&q=Eiffel%20Tower" in result.output
        assert "Showing coordinates: 48.8584, 2.2945 (Eiffel Tower)" in result.output

    def test_coordinates_whole_numbers(self, runner, mock_load_config):
        result = runner.invoke(cli, ["coordinates", "--lat", "0", "--lon", "0", "--dry-run"])

        assert "Showing coordinates: 0, 0" in result.output

    def test_pin(self, runner, mock_load_config):
        result = runner.invoke(cli, ["pin", "Ferry Building", "--label", "Meet here", "--dry-run"])

        assert "Dropped pin at: Ferry Building (Meet here)" in result.output

    def test_nearby(self, runner, mock_load_config):
        result = runner.invoke(cli, ["nearby", "pharmacy", "--dry-run"])

        assert "Command: open 'maps://?q=pharmacy'" in result.output
        assert "Searching for pharmacy nearby" in result.output

    def test_url(self, runner, mock_load_config, fake_popen):
        result = runner.invoke(cli, ["url", "Eiffel Tower"])

        assert result.exit_code == 0
        assert "App URL: maps://?address=Eiffel%20Tower" in result.output
        assert "Web URL: https://maps.apple.com/?address=Eiffel%20Tower" in result.output
        assert fake_popen.commands == []

    def test_dry_run_from_config(self, runner, mock_load_config, fake_popen):
        mock_load_config.return_value = AppConfig(executor=ExecutorConfig(dry_run=True))

        result = runner.invoke(cli, ["search", "coffee"])

        assert result.exit_code == 0
        assert fake_popen.commands == []

    def test_execution_error(self, runner, mock_load_config, fake_popen):
        fake_popen.returncode = 1
        fake_popen.stderr = b"execution error: Maps is not installed"

        result = runner.invoke(cli, ["open"])

        assert result.exit_code == 1
        assert "❌ Error: AppleScript error: execution error: Maps is not installed" in result.output
