"""Custom exceptions."""


class ModsquadError(Exception):
    """Base exception for modsquad."""

    pass


class ConfigError(ModsquadError):
    """Configuration error."""

    pass


class ToolNotFoundError(ModsquadError):
    """A required external tool is not on PATH."""

    def __init__(self, tools: list[str]):
        self.tools = tools
        names = ", ".join(f"'{t}'" for t in tools)
        super().__init__(f"Required tool {names} not found in PATH")
