"""
Decision oracle.

Composition nodes (and path selection) ask the oracle whether to include
things. The oracle is a capability object handed to the traversal context;
four interchangeable strategies exist: console, recorder, player and yes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum

import click

from ..errors import RecordingExhaustedError

logger = logging.getLogger(__name__)


class Answer(Enum):
    """An oracle answer, as stored in recordings."""

    YES = "y"
    NO = "n"
    SUBSET = "s"  # Only for yes/no/select decisions: choose items one by one


class Prompt(ABC):
    """Abstract base class for decision oracles."""

    @abstractmethod
    def yes_no(self, question: str) -> bool:
        """
        Ask a binary question.

        Args:
            question: The question shown to the operator

        Returns:
            True for yes
        """

    @abstractmethod
    def yes_no_select(self, question: str) -> Answer:
        """
        Ask a ternary question (yes, no, or select a subset).

        Args:
            question: The question shown to the operator

        Returns:
            The answer
        """


class ConsolePrompt(Prompt):
    """Prompts the operator on the terminal."""

    def yes_no(self, question: str) -> bool:
        return self._ask(question, [Answer.YES, Answer.NO]) is Answer.YES

    def yes_no_select(self, question: str) -> Answer:
        return self._ask(question, [Answer.YES, Answer.NO, Answer.SUBSET])

    def _ask(self, question: str, choices: list[Answer]) -> Answer:
        # Prompts go to stderr so that SDL written to stdout stays clean
        value = click.prompt(
            question.rstrip(),
            type=click.Choice([a.value for a in choices], case_sensitive=False),
            err=True,
        )
        return Answer(value.lower())


class RecorderPrompt(ConsolePrompt):
    """Prompts the operator and records every answer in decision order."""

    def __init__(self):
        self.recording: list[Answer] = []

    def _ask(self, question: str, choices: list[Answer]) -> Answer:
        answer = super()._ask(question, choices)
        self.recording.append(answer)
        return answer


class PlayerPrompt(Prompt):
    """Replays a recording, one answer per decision."""

    def __init__(self, answers: Sequence[Answer]):
        self.answers = list(answers)
        self.cursor = 0

    def yes_no(self, question: str) -> bool:
        return self._next(question) is Answer.YES

    def yes_no_select(self, question: str) -> Answer:
        return self._next(question)

    @property
    def remaining(self) -> int:
        return len(self.answers) - self.cursor

    def _next(self, question: str) -> Answer:
        if self.cursor >= len(self.answers):
            raise RecordingExhaustedError(
                f"Recording exhausted after {len(self.answers)} answers at: {question.strip()!r}. "
                "The recording was made against a different exploration path."
            )
        answer = self.answers[self.cursor]
        self.cursor += 1
        logger.info("%s -> %s", question.strip(), answer.value)
        return answer


class YesPrompt(Prompt):
    """Answers yes to everything without interaction."""

    def yes_no(self, question: str) -> bool:
        return True

    def yes_no_select(self, question: str) -> Answer:
        return Answer.YES


class PromptFactory:
    """Creates decision oracles."""

    INPUT_TYPES = ("prompt", "record", "skip")

    @staticmethod
    def console() -> Prompt:
        return ConsolePrompt()

    @staticmethod
    def recorder() -> RecorderPrompt:
        return RecorderPrompt()

    @staticmethod
    def player(answers: Sequence[Answer]) -> Prompt:
        return PlayerPrompt(answers)

    @staticmethod
    def yes() -> Prompt:
        return YesPrompt()

    @staticmethod
    def from_options(input_type: str = "prompt", recording: Sequence[Answer] | None = None) -> Prompt:
        """
        Pick the oracle for a run.

        A recording takes precedence over the input type.

        Args:
            input_type: One of "prompt", "record" or "skip"
            recording: Answers to replay

        Returns:
            The oracle to use
        """
        if recording is not None:
            if not recording:
                raise RecordingExhaustedError("Recording is empty")
            return PromptFactory.player(recording)
        if input_type == "prompt":
            return PromptFactory.console()
        if input_type == "record":
            return PromptFactory.recorder()
        if input_type == "skip":
            return PromptFactory.yes()
        raise ValueError(f"Input type needs to be one of {', '.join(PromptFactory.INPUT_TYPES)}, not: {input_type}")
