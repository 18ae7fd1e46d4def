"""Data Transfer Objects for the comment feed.

DTOs are immutable data containers passed between the store, the data
source and the rendering sink.
"""

from commentfeed.dto.row import CommentViewPayload, Row, RowPayload
from commentfeed.dto.row_address import RowAddress
from commentfeed.dto.row_update import RowChange, RowUpdate

__all__ = [
    "CommentViewPayload",
    "Row",
    "RowPayload",
    "RowAddress",
    "RowChange",
    "RowUpdate",
]
