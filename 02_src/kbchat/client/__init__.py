"""Client module."""

from .client import Client, IClient

__all__ = ["Client", "IClient"]
