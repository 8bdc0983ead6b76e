"""Public API for timelinize_cli package."""

from .client import TimelinizeClient, new_client
from .cli import main

__all__ = ["TimelinizeClient", "new_client", "main"]
