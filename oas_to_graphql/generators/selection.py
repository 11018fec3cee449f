"""
Selection-set generator: GraphQL field lists from the visited graph.

Each field is indented by the current visitation-stack depth. A field gets
braces iff its type is compound: an object, an allOf with selected
properties, or a oneOf or array standing for one of those. A compound field
leading back into a type already being selected is left out.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TextIO

from ..graph import Array, Composed, ComposedKind, Node, Object, Parameter, Property, Ref, Scalar, Union
from ..utils import sanitise_field_for_select
from .base import Generator, is_compound

logger = logging.getLogger(__name__)


class SelectionGenerator(Generator):
    """Writes selection sets."""

    def write(self, roots: Iterable[Node], writer: TextIO) -> None:
        for node in roots:
            self.select(node, writer)

    def select(self, node: Node, writer: TextIO) -> None:
        """
        Write the selection for a node.

        Objects and compositions already on the visitation stack are skipped
        with a warning, which stops cyclic shapes from recursing forever.

        Args:
            node: A visited node
            writer: Destination stream
        """
        if isinstance(node, Property):
            self._select_field(node, writer)
        elif isinstance(node, (Object, Composed)):
            if node in self.context.stack:
                logger.warning("Possible recursion! Stack should not already contain %s", node.name or node.id())
                return
            with self.context.entered(node):
                self.context.trace("-> [select]", f"in: {node.name or type(node).__name__}")
                if isinstance(node, Composed) and node.kind is ComposedKind.ONE_OF:
                    self.select(node.union, writer)
                else:
                    for prop in node.props.values():
                        self.select(prop, writer)
                self.context.trace("<- [select]", f"out: {node.name or type(node).__name__}")
        elif isinstance(node, Union):
            self.select(node.variant, writer)
        elif isinstance(node, Array):
            self.select(node.items, writer)
        elif isinstance(node, Ref):
            self.select(node.target, writer)
        elif not isinstance(node, (Scalar, Parameter)):
            raise TypeError(f"Cannot select {node!r}")

    def _select_field(self, prop: Property, writer: TextIO) -> None:
        indent = " " * self.context.depth
        value_type = prop.value_type
        if not is_compound(value_type):
            writer.write(indent + sanitise_field_for_select(prop.name) + "\n")
            return

        # A field leading back into a type being selected would have no valid sub-selection
        target = selection_target(value_type)
        if target in self.context.stack:
            logger.warning("Possible recursion! Skipping field '%s' of type %s", prop.name, target.name or target.id())
            return

        writer.write(indent + sanitise_field_for_select(prop.name) + " {\n")
        self.select(value_type, writer)
        writer.write(indent + "}\n")


def selection_target(node: Node | None) -> Node | None:
    """The object or composition a compound field's sub-selection enters."""
    while isinstance(node, (Array, Ref, Union)):
        if isinstance(node, Array):
            node = node.items
        elif isinstance(node, Ref):
            node = node.target
        else:
            node = node.variant
    return node
