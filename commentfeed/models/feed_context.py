from __future__ import annotations
from dataclasses import dataclass

from .ids import ProjectId


@dataclass(frozen=True, slots=True)
class FeedContext:
    """Parent the comment feed belongs to; passed through to comment rows."""
    project_id: ProjectId
    project_name: str = ""
    creator_name: str = ""
