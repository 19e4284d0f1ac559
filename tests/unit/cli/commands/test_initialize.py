"""
Unit tests for the 'init' command.
"""

from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from topolens.cli.commands.initialize import init


class TestInitCommand:
    """Test the init command."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def mock_cwd(self, tmp_path):
        """Mock current working directory to a temp path."""
        with patch("pathlib.Path.cwd", return_value=tmp_path):
            yield tmp_path

    def test_init_writes_default_config(self, runner, mock_cwd):
        result = runner.invoke(init)

        assert result.exit_code == 0
        assert "Initialized successfully" in result.output

        config_path = mock_cwd / ".topolens/config.yaml"
        with open(config_path) as f:
            config = yaml.safe_load(f)
        assert config["style"]["highlight_color"] == "#00a6fb"
        assert config["filters"]["default"] == []
        assert not (mock_cwd / "topology.json").exists()

    def test_init_demo_writes_topology(self, runner, mock_cwd):
        result = runner.invoke(init, ["--demo"])

        assert result.exit_code == 0
        assert (mock_cwd / "topology.json").exists()

    @patch("topolens.cli.commands.initialize.Confirm.ask", return_value=False)
    def test_existing_config_not_overwritten(self, mock_confirm, runner, mock_cwd):
        config_path = mock_cwd / ".topolens/config.yaml"
        config_path.parent.mkdir()
        config_path.write_text("version: custom\n")

        result = runner.invoke(init)

        assert result.exit_code == 0
        assert config_path.read_text() == "version: custom\n"
        mock_confirm.assert_called_once()

    def test_force_overwrites(self, runner, mock_cwd):
        config_path = mock_cwd / ".topolens/config.yaml"
        config_path.parent.mkdir()
        config_path.write_text("version: custom\n")

        result = runner.invoke(init, ["--force"])

        assert result.exit_code == 0
        assert yaml.safe_load(config_path.read_text())["version"] == "1.0"
