"""Sink-side adapters for the comment feed.

Rendering is outside the feed; these adapters describe the container
contract and route rows to whatever draws them.
"""

from commentfeed.adapters.row_sink import InMemoryRowSink, RowSink
from commentfeed.adapters.row_renderers import RowRenderer, RowRendererRegistry

__all__ = [
    "InMemoryRowSink",
    "RowSink",
    "RowRenderer",
    "RowRendererRegistry",
]
