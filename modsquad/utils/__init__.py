"""Utility modules."""

from modsquad.utils.errors import ConfigError, ModsquadError, ToolNotFoundError
from modsquad.utils.logging import setup_logging

__all__ = ["ConfigError", "ModsquadError", "ToolNotFoundError", "setup_logging"]
