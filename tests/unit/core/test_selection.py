"""Unit tests for the selection controller state machine."""

import pytest

from topolens.config import FilterConfig, TopologyConfig
from topolens.core.selection import SelectionController
from topolens.core.types import Edge, Graph, Node, NodeKind, Position, ScopeKind, ViewMode


@pytest.fixture
def graph():
    return Graph(
        nodes=(
            Node(id="ns-default", type=NodeKind.NAMESPACE, label="default", position=Position(x=800, y=-1250)),
            Node(id="ns-system", type=NodeKind.NAMESPACE, label="kube-system", position=Position(x=2000, y=-1250)),
            Node(id="node-1", type=NodeKind.NODE, label="worker-node-1", position=Position(x=0, y=-250)),
            Node(id="node-2", type=NodeKind.NODE, label="worker-node-2", position=Position(x=500, y=-250)),
            Node(id="pod-1", type=NodeKind.POD, label="payment-gateway-1", position=Position(x=100, y=-500)),
            Node(id="pod-2", type=NodeKind.POD, label="inventory-service-1", position=Position(x=300, y=-500)),
            Node(id="svc-1", type=NodeKind.SERVICE, label="payment-gateway", position=Position(x=200, y=-1000)),
        ),
        edges=(
            Edge(source="node-1", target="pod-1"),
            Edge(source="pod-1", target="svc-1"),
            Edge(source="pod-2", target="svc-1"),
            Edge(source="ns-system", target="node-2"),
        ),
    )


@pytest.fixture
def controller(graph):
    controller = SelectionController()
    controller.mount(ScopeKind.GLOBAL, "", "", graph)
    return controller


class TestMount:
    def test_global_fits_view(self, graph):
        view = SelectionController().mount(ScopeKind.GLOBAL, "", "", graph)

        assert view.selection is None
        assert view.detail is None
        assert view.camera.action == "fit"
        assert view.camera.padding == 0.2
        assert view.related_counts is None

    def test_scope_target_is_focused(self, graph):
        view = SelectionController().mount(ScopeKind.POD, "pod-1", "", graph)

        assert view.selection == "pod-1"
        assert view.detail["id"] == "pod-1"
        assert view.camera.action == "center"
        assert (view.camera.x, view.camera.y, view.camera.zoom) == (100, -500, 1.2)
        assert view.highlighted_ids == {"node-1", "pod-1", "svc-1", "pod-2"}

    def test_remount_resets_state(self, controller, graph):
        controller.toggle_filter("app:payment")
        controller.node_click("svc-1")
        view = controller.mount(ScopeKind.GLOBAL, "", "", graph)

        assert view.state.filters == frozenset()
        assert view.selection is None

    def test_default_filters_from_config(self, graph):
        config = TopologyConfig(filters=FilterConfig(default=["ns:default"]))
        view = SelectionController(config=config).mount(ScopeKind.GLOBAL, "", "", graph)

        assert view.state.filters == {"ns:default"}
        assert view.node_view("ns-system") is None

    def test_focus_target_hidden_by_default_filters(self, graph):
        config = TopologyConfig(filters=FilterConfig(default=["ns:default"]))
        view = SelectionController(config=config).mount(ScopeKind.NAMESPACE, "", "kube-system", graph)

        assert view.selection is None
        assert view.camera.action == "fit"


class TestNodeClick:
    def test_focus_and_detail(self, controller):
        view = controller.node_click("pod-1")

        assert controller.is_focused
        assert view.selection == "pod-1"
        assert view.detail["label"] == "payment-gateway-1"
        assert view.related_counts == {"node": 1, "pod": 2, "service": 1}
        assert view.node_view("ns-default").state.opacity == 0.2
        assert view.camera.action == "center"
        assert view.camera.zoom is None

    def test_switch_focus(self, controller):
        controller.node_click("pod-1")
        view = controller.node_click("node-2")

        assert view.selection == "node-2"
        assert view.highlighted_ids == {"node-2", "ns-system"}
        assert view.node_view("pod-1").state.grayscale

    def test_click_unknown_node_resets(self, controller):
        controller.node_click("pod-1")
        view = controller.node_click("does-not-exist")

        assert view.selection is None
        assert view.detail is None
        assert all(v.state.opacity == 1.0 for v in view.nodes)

    def test_pane_click_returns_to_idle(self, controller):
        controller.node_click("pod-1")
        view = controller.pane_click()

        assert not controller.is_focused
        assert view.detail is None
        assert view.related_counts is None
        assert view.camera is None
        assert all(v.state.animated for v in view.edges)


class TestFilterInteraction:
    def test_filter_hiding_selection_resets(self, controller):
        controller.node_click("ns-system")
        view = controller.toggle_filter("ns:default")

        assert view.selection is None
        assert view.node_view("ns-system") is None
        assert all(v.state.opacity == 1.0 and not v.state.grayscale for v in view.nodes)

    def test_filter_keeping_selection_recomputes(self, controller):
        controller.node_click("pod-1")
        view = controller.toggle_filter("app:payment")

        # pod-2 (inventory) is hidden, so the bridge through svc-1 no longer reaches it
        assert view.selection == "pod-1"
        assert view.highlighted_ids == {"node-1", "pod-1", "svc-1"}
        assert view.related_counts == {"node": 1, "pod": 1, "service": 1}

    def test_toggle_twice_restores(self, controller):
        controller.node_click("pod-1")
        controller.toggle_filter("app:payment")
        view = controller.toggle_filter("app:payment")

        assert view.state.filters == frozenset()
        assert view.highlighted_ids == {"node-1", "pod-1", "svc-1", "pod-2"}

    def test_click_on_filtered_node_is_noop_reset(self, controller):
        controller.toggle_filter("app:payment")
        view = controller.node_click("pod-2")
        assert view.selection is None


class TestLayersAndModes:
    def test_layer_totals(self, controller):
        assert controller.view.layer_totals == {"namespace": 2, "node": 2, "pod": 2, "service": 1}

    def test_select_layer_centers_bounding_box(self, controller):
        view = controller.select_layer(NodeKind.NODE)

        assert view.state.active_layer == NodeKind.NODE
        assert (view.camera.x, view.camera.y, view.camera.zoom) == (250, -250, 1.0)

    def test_select_empty_layer(self, controller):
        view = controller.select_layer("workload")
        assert view.state.active_layer == NodeKind.WORKLOAD
        assert view.camera is None

    def test_vulnerability_mode(self, controller):
        view = controller.set_view_mode(ViewMode.VULNERABILITY)
        assert all(v.show_vulnerability for v in view.nodes)
        view = controller.set_view_mode("topology")
        assert not any(v.show_vulnerability for v in view.nodes)


class TestSubscribers:
    def test_subscribers_receive_each_view(self, controller):
        received = []
        unsubscribe = controller.subscribe(received.append)

        controller.node_click("pod-1")
        controller.pane_click()
        unsubscribe()
        controller.node_click("svc-1")

        assert [v.selection for v in received] == ["pod-1", None]
