"""
Base class for generators walking an already-visited type graph.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TextIO

from ..graph import Array, Composed, ComposedKind, Context, Node, Object, Ref, Union


class Generator(ABC):
    """Abstract base class for output generators."""

    def __init__(self, context: Context):
        """
        Initialize the generator.

        Args:
            context: The context the graph was visited with
        """
        self.context = context
        self.config = context.config

    @abstractmethod
    def write(self, roots: Iterable[Node], writer: TextIO) -> None:
        """
        Write the output for the given root nodes.

        Args:
            roots: Visited nodes to generate from
            writer: Destination stream
        """


def is_compound(node: Node | None) -> bool:
    """
    Whether a value of this type needs a sub-selection.

    Arrays, refs and oneOf are unwrapped to what they stand for, so a field
    is compound exactly when its SDL type is a generated object type.
    """
    if isinstance(node, Array):
        return is_compound(node.items)
    if isinstance(node, Ref):
        return is_compound(node.target)
    if isinstance(node, Union):
        return is_compound(node.variant)
    if isinstance(node, Composed):
        if node.kind is ComposedKind.ONE_OF:
            return is_compound(node.union.variant)
        return bool(node.props)
    if isinstance(node, Object):
        return not node.is_free_form
    return False
