"""
Traversal context shared by the visit and generation phases.

Holds the visitation stack (recursion guard and indentation depth), the
type store (memoization by $ref name), the composition nesting counter,
the decision oracle and the document used to resolve $refs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from ..config import GeneratorConfig
from ..document import OpenApiDocument
from ..prompt import Prompt, PromptFactory
from .nodes import Composed, Node

logger = logging.getLogger(__name__)


class TypeStore:
    """Insert-once map from $ref name to node.

    The first writer wins: storing a different node under an existing name
    is a no-op that logs a diagnostic, so consumers holding the first node
    never observe a replacement.
    """

    def __init__(self):
        self._types: dict[str, Node] = {}

    def put(self, name: str, node: Node) -> Node:
        """
        Store a node unless the name is taken.

        Args:
            name: The $ref name
            node: The node to store

        Returns:
            The live node stored under the name
        """
        existing = self._types.get(name)
        if existing is None:
            self._types[name] = node
            return node
        if existing is not node:
            logger.warning("Type store already holds '%s', keeping the first node (ignored %r)", name, node)
        return existing

    def get(self, name: str) -> Node | None:
        return self._types.get(name)

    def items(self):
        return self._types.items()

    def values(self):
        return self._types.values()

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)


class Context:
    """Process-scoped state threaded through visit, generate and select."""

    def __init__(
        self,
        document: OpenApiDocument,
        prompt: Prompt | None = None,
        config: GeneratorConfig | None = None,
    ):
        """
        Initialize the context.

        Args:
            document: Document used to resolve $refs
            prompt: Decision oracle (answers yes to everything when None)
            config: Generation configuration
        """
        self.document = document
        self.prompt = prompt or PromptFactory.yes()
        self.config = config or GeneratorConfig()
        self.stack: list[Node] = []
        self.types = TypeStore()
        self.compose_depth = 0

    @property
    def depth(self) -> int:
        return len(self.stack)

    def enter(self, node: Node) -> None:
        self.stack.append(node)
        if isinstance(node, Composed):
            self.compose_depth += 1

    def leave(self) -> Node:
        node = self.stack.pop()
        if isinstance(node, Composed):
            self.compose_depth -= 1
        return node

    @contextmanager
    def entered(self, node: Node) -> Iterator[Node]:
        """Push the node for the duration of the block, popping it on every exit path."""
        self.enter(node)
        try:
            yield node
        finally:
            self.leave()

    def store(self, name: str, node: Node) -> Node:
        """Memoize a node under its $ref name (first writer wins)."""
        self.trace("   [store]", f"storing: {name}")
        return self.types.put(name, node)

    def get(self, name: str) -> Node | None:
        return self.types.get(name)

    def lookup_ref(self, ref: str) -> dict[str, Any]:
        """Resolve a $ref to its raw declaration; raises MalformedReferenceError."""
        return self.document.lookup_ref(ref)

    def in_compose_context(self, node: Node) -> bool:
        """Whether an enclosing allOf/oneOf expansion is in progress, `node` itself excluded."""
        depth = self.compose_depth
        if isinstance(node, Composed) and node in self.stack:
            depth -= 1
        return depth > 0

    def trace(self, tag: str, message: str) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s%s %s", " " * self.depth, tag, message)
