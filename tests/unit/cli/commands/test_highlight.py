"""
Unit tests for the 'highlight' command.
"""

import json

import pytest
from click.testing import CliRunner

from topolens.cli.commands.highlight import highlight
from topolens.core.demo import DemoManager


class TestHighlightCommand:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def topology(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        return DemoManager(tmp_path).provision()

    def test_text_output_lists_related_nodes(self, runner, topology):
        result = runner.invoke(highlight, ["pod-pay-0", "-g", str(topology)])

        assert result.exit_code == 0
        assert "related node(s)" in result.output
        assert "ext-stripe" in result.output
        assert "ns-system" not in result.output

    def test_json_output(self, runner, topology):
        result = runner.invoke(highlight, ["ns-system", "-g", str(topology), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["state"]["selection"] == "ns-system"
        assert data["related_counts"] == {"namespace": 1}
        assert data["detail"]["label"] == "kube-system"

    def test_filtered_out_node(self, runner, topology):
        result = runner.invoke(highlight, ["ns-system", "-g", str(topology), "-f", "ns:default"])

        assert result.exit_code == 0
        assert "Node not visible: ns-system" in result.output

    def test_filters_limit_traversal(self, runner, topology):
        result = runner.invoke(
            highlight, ["pod-pay-0", "-g", str(topology), "-f", "app:payment", "--json"]
        )
        data = json.loads(result.output)
        lit = {v["node"]["id"] for v in data["nodes"] if v["state"]["opacity"] == 1.0}

        assert "pod-pay-0" in lit
        assert "svc-pay" in lit
        assert "pod-inv-0" not in lit

    def test_missing_topology(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(highlight, ["svc-pay", "-g", "nope.json"])

        assert result.exit_code == 1
        assert "Topology file not found" in result.output

    def test_duplicate_nodes_reported(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "dup.json"
        path.write_text(json.dumps({
            "nodes": [
                {"id": "a", "type": "pod", "label": "a"},
                {"id": "a", "type": "pod", "label": "again"},
            ],
            "edges": [],
        }))
        result = runner.invoke(highlight, ["a", "-g", str(path)])

        assert result.exit_code == 1
        assert "Duplicate node ids" in result.output

    def test_fully_opaque_dimming_lists_only_related(self, runner, topology, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("style:\n  dimmed_opacity: 1.0\n")
        result = runner.invoke(highlight, ["pod-pay-0", "-g", str(topology), "-c", str(config)])

        assert result.exit_code == 0
        assert "ext-stripe" in result.output
        assert "ns-system" not in result.output
