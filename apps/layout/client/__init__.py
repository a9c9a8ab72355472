"""Client layout agent: local layout view-model plus debounced sync with /api/layout."""

from .agent import LayoutAgent
from .state import AgentConfig, LayoutViewState

__all__ = ["AgentConfig", "LayoutAgent", "LayoutViewState"]
