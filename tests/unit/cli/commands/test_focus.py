"""
Unit tests for the 'focus' command.
"""

import pytest
from click.testing import CliRunner

from topolens.cli.commands.focus import focus
from topolens.core.demo import DemoManager


class TestFocusCommand:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def topology(self, tmp_path):
        return DemoManager(tmp_path).provision()

    def test_pod_scope(self, runner, topology):
        result = runner.invoke(focus, ["pod", "pod-inv-2", "-g", str(topology)])

        assert result.exit_code == 0
        assert "pod-inv-2" in result.output
        assert "inventory-service-2" in result.output

    def test_pod_fallback(self, runner, topology):
        result = runner.invoke(focus, ["pod", "nonexistent-id", "-l", "nonexistent-label",
                                       "-g", str(topology)])
        assert result.exit_code == 0
        assert "pod-auth-0" in result.output

    def test_namespace_scope_uses_label(self, runner, topology):
        result = runner.invoke(focus, ["namespace", "x", "-l", "kube-system", "-g", str(topology)])
        assert "ns-system" in result.output

    def test_global_scope(self, runner, topology):
        result = runner.invoke(focus, ["global", "-g", str(topology)])

        assert result.exit_code == 0
        assert "No focus target" in result.output

    def test_directory_lookup(self, runner, topology):
        result = runner.invoke(focus, ["cluster", "prod", "-g", str(topology.parent)])
        assert "node-0" in result.output

    def test_invalid_scope(self, runner, topology):
        result = runner.invoke(focus, ["galaxy", "x", "-g", str(topology)])
        assert result.exit_code != 0
