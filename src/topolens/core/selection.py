"""
Selection Controller.

Sits between user input (renderer callbacks, filter bar, layer sidebar) and
the projection. States:

    Idle ──node click──▶ Focused(id) ──node click──▶ Focused(other)
      ▲                      │
      └── pane click / filter change hiding the selected node

Every event produces a new ``ViewState`` and a freshly projected
``ViewModel``; events are applied strictly in arrival order, and each
highlight is computed against the filter state current at that moment.
"""

import logging
from typing import Callable, List, Optional

from ..analysis.highlight import DependencyHighlighter
from ..config import (
    FIT_DURATION_MS,
    FOCUS_DURATION_MS,
    LAYER_DURATION_MS,
    TopologyConfig,
)
from .filters import FilterEngine, toggle
from .scope import ScopeResolver
from .store import GraphStore
from .types import Graph, NodeKind, ScopeKind, ViewMode
from .view import CameraRequest, Scope, ViewModel, ViewState, project

logger = logging.getLogger(__name__)

Subscriber = Callable[[ViewModel], None]


class SelectionController:
    """
    Owns the ``ViewState`` of one mounted topology view.
    """

    def __init__(
        self,
        store: Optional[GraphStore] = None,
        config: Optional[TopologyConfig] = None,
    ):
        self.store = store or GraphStore()
        self.config = config or TopologyConfig()
        self.highlighter = DependencyHighlighter(self.config.style)
        self.filter_engine = FilterEngine()
        self.resolver = ScopeResolver()
        self._state = ViewState()
        self._subscribers: List[Subscriber] = []
        self._view = self._project(None)

    # --- Read access ---

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def view(self) -> ViewModel:
        """The most recently projected view model."""
        return self._view

    @property
    def is_focused(self) -> bool:
        return self._state.selection is not None

    def visible_graph(self) -> Graph:
        return self.filter_engine.apply(self.store.snapshot(), self._state.filters)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a view-model listener. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # --- Events ---

    def mount(self, scope: ScopeKind | str, scope_id: str, label: str, graph: Graph) -> ViewModel:
        """
        Load a freshly generated layout and focus the scope's target node.

        Filters reset to the configured defaults; a scope with no target
        fits the whole view instead of focusing anything.
        """
        self.store.load(graph)
        scope = ScopeKind(scope)
        self._state = ViewState(
            scope=Scope(kind=scope, id=scope_id, label=label),
            filters=frozenset(self.config.filters.default),
        )

        target = self.resolver.resolve(scope, scope_id, label, self.store.snapshot())
        if target is not None and target in self.visible_graph().node_ids():
            logger.debug(f"Mounted {scope}:{scope_id}, focusing {target}")
            return self._focus(target, zoom=self.config.camera.focus_zoom)

        logger.debug(f"Mounted {scope}:{scope_id}, no focus target")
        return self._commit(CameraRequest(
            action="fit",
            padding=self.config.camera.fit_padding,
            duration_ms=FIT_DURATION_MS,
        ))

    def node_click(self, node_id: str) -> ViewModel:
        """Focus a node. Ids outside the visible subgraph reset to Idle."""
        if node_id not in self.visible_graph().node_ids():
            logger.debug(f"Ignoring click on hidden or unknown node {node_id}")
            return self.pane_click()
        return self._focus(node_id, zoom=None)

    def pane_click(self) -> ViewModel:
        self._state = self._state.model_copy(update={"selection": None})
        return self._commit(None)

    def toggle_filter(self, key: str) -> ViewModel:
        """
        Add or remove a filter key and re-derive the view.

        A selection whose node is no longer visible is cleared.
        """
        filters = toggle(self._state.filters, key)
        self._state = self._state.model_copy(update={"filters": filters})

        selection = self._state.selection
        if selection is not None and selection not in self.visible_graph().node_ids():
            logger.debug(f"Filter change hid selected node {selection}, returning to idle")
            self._state = self._state.model_copy(update={"selection": None})
        return self._commit(None)

    def set_view_mode(self, mode: ViewMode | str) -> ViewModel:
        self._state = self._state.model_copy(update={"view_mode": ViewMode(mode)})
        return self._commit(None)

    def select_layer(self, kind: NodeKind | str) -> ViewModel:
        """Pan to the centre of the visible nodes of one kind."""
        kind = NodeKind(kind)
        self._state = self._state.model_copy(update={"active_layer": kind})

        layer = [node for node in self.visible_graph().nodes if node.type == kind]
        if not layer:
            return self._commit(None)

        xs = [node.position.x for node in layer]
        ys = [node.position.y for node in layer]
        return self._commit(CameraRequest(
            action="center",
            x=(min(xs) + max(xs)) / 2,
            y=(min(ys) + max(ys)) / 2,
            zoom=self.config.camera.layer_zoom,
            duration_ms=LAYER_DURATION_MS,
        ))

    # --- Internals ---

    def _focus(self, node_id: str, zoom: Optional[float]) -> ViewModel:
        self._state = self._state.model_copy(update={"selection": node_id})
        node = self.store.get_node(node_id)
        camera = None
        if node is not None:
            camera = CameraRequest(
                action="center",
                x=node.position.x,
                y=node.position.y,
                zoom=zoom,
                duration_ms=FOCUS_DURATION_MS,
            )
        return self._commit(camera)

    def _project(self, camera: Optional[CameraRequest]) -> ViewModel:
        return project(
            self.store.snapshot(),
            self._state,
            highlighter=self.highlighter,
            camera=camera,
            filter_engine=self.filter_engine,
        )

    def _commit(self, camera: Optional[CameraRequest]) -> ViewModel:
        self._view = self._project(camera)
        for callback in list(self._subscribers):
            callback(self._view)
        return self._view
