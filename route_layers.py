"""
Output-consumer abstraction for visualized routes.

The core never draws anything itself. Anything that displays or reacts to a
route (a map surface, a static preview, a navigation tracker) implements
RouteLayer and is registered with a LayerRegistry.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from route_export.data_models import DirectionMarker, TurnEvent


class RouteLayer(ABC):
    """
    Abstract base class for route consumers.

    A layer receives the cleaned path together with both annotation sequences.
    It may read but must not mutate them.

    Subclasses must implement:
        - show(path, turns, markers, synthetic=False): Display or consume the route

    Example:
        class PrintLayer(RouteLayer):
            def show(self, path, turns, markers, synthetic=False):
                print(f"{len(path)} points, {len(turns)} turns")

        registry = LayerRegistry()
        registry.register('print', PrintLayer())
    """

    def __init__(self, visible: bool = True):
        self._visible = visible

    @property
    def visible(self) -> bool:
        """Whether the registry should push routes to this layer."""
        return self._visible

    @visible.setter
    def visible(self, value: bool):
        self._visible = value

    @abstractmethod
    def show(self, path: Sequence[Tuple[float, float]],
             turns: Sequence[TurnEvent],
             markers: Sequence[DirectionMarker],
             synthetic: bool = False) -> None:
        """
        Consume a route.

        Args:
            path: Cleaned (lat, lon) path
            turns: Turn events ordered by path index
            markers: Direction markers ordered along the path (may be empty)
            synthetic: True when the path is a demonstration path rather than
                mapped road coordinates
        """
        pass

    def clear(self) -> None:
        """Remove whatever this layer currently displays."""


class LayerRegistry:
    """
    Ordered collection of route layers.

    Example:
        registry = LayerRegistry()
        registry.register('preview', RoutePreviewRenderer())
        registry.register('navigation', NavigationTracker())

        registry.show_all(path, turns, markers)
    """

    def __init__(self):
        self._layers: dict[str, RouteLayer] = {}
        self._order: List[str] = []

    def register(self, name: str, layer: RouteLayer) -> None:
        """
        Register a layer with a unique name.

        Args:
            name: Unique identifier for this layer
            layer: RouteLayer instance to register
        """
        if name not in self._layers:
            self._order.append(name)
        self._layers[name] = layer

    def unregister(self, name: str) -> Optional[RouteLayer]:
        """
        Remove a layer by name.

        Returns:
            The removed layer, or None if not found
        """
        if name in self._layers:
            self._order.remove(name)
            return self._layers.pop(name)
        return None

    def get(self, name: str) -> Optional[RouteLayer]:
        """Get a layer by name."""
        return self._layers.get(name)

    def show_all(self, path: Sequence[Tuple[float, float]],
                 turns: Sequence[TurnEvent],
                 markers: Sequence[DirectionMarker],
                 synthetic: bool = False) -> None:
        """Push a route to every visible layer in registration order."""
        for name in self._order:
            layer = self._layers[name]
            if layer.visible:
                layer.show(path, turns, markers, synthetic=synthetic)

    def clear_all(self) -> None:
        """Clear every registered layer."""
        for name in self._order:
            self._layers[name].clear()

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self):
        for name in self._order:
            yield name, self._layers[name]
