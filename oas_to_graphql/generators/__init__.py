"""
Generators module.

Two output modes over the same visited graph: SDL type definitions and
selection sets.
"""

from __future__ import annotations

from .base import Generator, is_compound
from .sdl import SdlGenerator, format_default_value
from .selection import SelectionGenerator

__all__ = [
    "Generator",
    "SdlGenerator",
    "SelectionGenerator",
    "format_default_value",
    "is_compound",
]
