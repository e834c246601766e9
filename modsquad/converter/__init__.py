"""Module conversion."""

from modsquad.converter.interrupt import InterruptGuard, interrupt_guard
from modsquad.converter.paths import resolve_output_path
from modsquad.converter.pipeline import ConversionPipeline
from modsquad.converter.tools import find_missing_tools, run_tool

__all__ = [
    "find_missing_tools",
    "interrupt_guard",
    "resolve_output_path",
    "run_tool",
    "ConversionPipeline",
    "InterruptGuard",
]
