"""State module."""

from .state import ApplicationState, IStateObserver

__all__ = ["ApplicationState", "IStateObserver"]
