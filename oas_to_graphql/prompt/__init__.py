"""
Prompt module.

Decision oracles and the recording codec used to replay them.
"""

from __future__ import annotations

from . import recordings
from .base import (
    Answer,
    ConsolePrompt,
    PlayerPrompt,
    Prompt,
    PromptFactory,
    RecorderPrompt,
    YesPrompt,
)

__all__ = [
    "Answer",
    "Prompt",
    "ConsolePrompt",
    "RecorderPrompt",
    "PlayerPrompt",
    "YesPrompt",
    "PromptFactory",
    "recordings",
]
