"""Dispatch of rows to the renderer registered for their kind.

The host registers one callable per RepresentationKind (a cell factory, a
widget builder, a string formatter). Dispatching a kind with no renderer is
a wiring error.
"""

from __future__ import annotations
from typing import Any, Callable, Dict

from commentfeed.dto.row import Row
from commentfeed.enum.representation_kind import RepresentationKind
from commentfeed.exceptions.errors import RowPayloadError

RowRenderer = Callable[[Any], Any]


class RowRendererRegistry:
    """Maps representation kinds to renderer callables."""

    def __init__(self) -> None:
        self._renderers: Dict[RepresentationKind, RowRenderer] = {}

    def register(self, kind: RepresentationKind, renderer: RowRenderer) -> None:
        self._renderers[kind] = renderer

    def is_complete(self) -> bool:
        """True when every kind has a renderer."""
        return all(kind in self._renderers for kind in RepresentationKind)

    def render(self, row: Row) -> Any:
        """
        Call the renderer for `row.kind` with the row payload.

        Raises:
            RowPayloadError: No renderer is registered for the kind.
        """
        renderer = self._renderers.get(row.kind)
        if renderer is None:
            raise RowPayloadError(f"No renderer registered for {row.kind.name}")
        return renderer(row.payload)
