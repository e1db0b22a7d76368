"""Controller module."""

from .controller import Controller, ControllerStatus

__all__ = ["Controller", "ControllerStatus"]
