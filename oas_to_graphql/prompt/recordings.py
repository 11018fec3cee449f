"""
Recording codec.

A recording is a line-oriented text file, one decision per line. The leading
character of each line is the answer: 'y' (yes), 'n' (no) or 's' (subset).
Anything after the first character is ignored, so lines may carry a note.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..errors import RecordingExhaustedError, RecordingFormatError
from ..output import OutputWriter
from .base import Answer


def from_lines(lines: Iterable[str]) -> list[Answer]:
    """
    Decode recorded answers.

    Args:
        lines: Lines of a recording; blank lines are skipped

    Returns:
        The answers in decision order

    Raises:
        RecordingFormatError: If a line does not start with 'y', 'n' or 's'
    """
    answers = []
    for number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            answers.append(Answer(line[0].lower()))
        except ValueError:
            raise RecordingFormatError(f"Invalid recording line {number}: '{line}' (expected 'y', 'n' or 's')") from None
    return answers


def to_text(answers: Iterable[Answer]) -> str:
    """Encode answers, one per line."""
    return "".join(f"{answer.value}\n" for answer in answers)


def load(path: str | Path) -> list[Answer]:
    """Read a recording file; an empty recording is an error."""
    with open(path, encoding="utf-8") as f:
        answers = from_lines(f)
    if not answers:
        raise RecordingExhaustedError(f"Recording '{Path(path).name}' is empty")
    return answers


def save(path: str | Path, answers: Iterable[Answer]) -> None:
    """Write a recording file, replacing an existing one."""
    OutputWriter().write(path, to_text(answers))
