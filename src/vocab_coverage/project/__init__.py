from __future__ import annotations

from .layout import ProjectLayout, list_projects

__all__ = ["ProjectLayout", "list_projects"]
