from __future__ import annotations
from typing import NewType

CommentId = NewType("CommentId", str)
ProjectId = NewType("ProjectId", str)
