"""
Visit protocol: builds the type graph from the document.

A node goes unvisited -> visiting (on the context stack) -> visited. $refs
are resolved on demand and memoized in the context's type store; a resolved
node is stored before its subtree is visited, so a cycle re-entering the
same $ref picks up the in-progress node instead of recursing.
"""

from __future__ import annotations

import logging

from ..errors import UnsupportedSchemaShapeError
from ..prompt import Answer
from .context import Context
from .factory import Factory
from .nodes import (
    Array,
    Composed,
    ComposedKind,
    Node,
    Object,
    Parameter,
    Property,
    PropertyRef,
    Ref,
    Scalar,
    Union,
)

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Visits nodes, resolving $refs and composing allOf/oneOf schemas."""

    def __init__(self, context: Context):
        self.context = context

    def visit(self, node: Node) -> None:
        """
        Visit a node and its subtree; a visited node is never revisited.

        Args:
            node: The node to visit

        Raises:
            UnsupportedSchemaShapeError: If the node kind is unknown
            MalformedReferenceError: If a $ref does not resolve
        """
        if node.visited:
            return

        with self.context.entered(node):
            if isinstance(node, Scalar):
                pass
            elif isinstance(node, Object):
                self._visit_object(node)
            elif isinstance(node, Array):
                self.visit(node.items)
            elif isinstance(node, PropertyRef):
                node.ref_type = self.resolve(node, node.ref)
                node.add(node.ref_type)
            elif isinstance(node, Property):
                for argument in node.arguments:
                    self.visit(argument)
                self.visit(node.type_node)
            elif isinstance(node, Ref):
                node.target = self.resolve(node, node.ref)
                node.add(node.target)
            elif isinstance(node, Composed):
                self._visit_composed(node)
            elif isinstance(node, Union):
                self._visit_union(node)
            elif isinstance(node, Parameter):
                self.visit(node.type_node)
            else:
                raise UnsupportedSchemaShapeError(f"Unsupported node kind: {type(node).__name__}")

            node.visited = True

    def resolve(self, owner: Node, ref: str) -> Node:
        """
        The node for a $ref, built and visited on first use, cached afterwards.

        Args:
            owner: The node holding the $ref
            ref: The $ref string

        Returns:
            The cached node for the ref
        """
        context = self.context
        cached = context.get(ref)
        if cached is not None:
            context.trace("   [ref]", f"cached: {ref}")
            return cached

        context.trace("-> [ref]", f"in: {ref}")
        schema = context.lookup_ref(ref)
        node = Factory.from_schema(owner, schema)
        node.name = ref
        node = context.store(ref, node)
        self.visit(node)
        context.trace("<- [ref]", f"out: {ref}")
        return node

    def _visit_object(self, node: Object) -> None:
        self.context.trace("-> [object]", f"in: {node.name or '[object]'}")
        for prop in list(node.props.values()):
            self.visit(prop)
        self.context.trace("<- [object]", f"out: {node.name or '[object]'}")

    def _visit_composed(self, node: Composed) -> None:
        context = self.context
        context.trace("-> [composed]", f"in: {node.name or '[object]'}")

        if not context.in_compose_context(node):
            logger.info("In composed schema: %s", node.name or _owner_name(node))

        if node.kind is ComposedKind.ALL_OF:
            self._visit_all_of(node)
        elif node.kind is ComposedKind.ONE_OF:
            self._visit_one_of(node)
        else:
            raise UnsupportedSchemaShapeError(f"Unsupported composed schema: {node.kind}")

        context.trace("<- [composed]", f"out: {node.name or '[object]'}")

    def _visit_all_of(self, node: Composed) -> None:
        """Merge the properties of every member, asking which to keep at the outermost composition."""
        context = self.context
        collected = self.collect_properties(node)

        if context.in_compose_context(node):
            selected = list(collected.values())
        else:
            selected = select_properties(context, node, collected)

        for prop in selected:
            node.put(prop)

        # Named compositions are stored before returning (no-op when already stored by ref)
        if node.name is not None:
            context.store(node.name, node)

    def collect_properties(self, node: Composed) -> dict[str, Property]:
        """Visit every allOf member and collect their properties, later members winning on name collision."""
        collected: dict[str, Property] = {}
        for member_schema in node.schema["allOf"]:
            member = Factory.from_schema(node, member_schema)
            self.visit(member)
            collected.update(properties_of(member))
        return collected

    def _visit_one_of(self, node: Composed) -> None:
        union = Factory.from_union(node, node.schema["oneOf"])
        node.add(union)
        self.visit(union)

        if node.name is not None:
            self.context.store(node.name, node)

    def _visit_union(self, node: Union) -> None:
        """Visit every member; only the first is retained as the union's variant."""
        if not node.schemas:
            raise UnsupportedSchemaShapeError(f"Unsupported schema kind: empty oneOf (under {_owner_name(node)})")

        for index, member_schema in enumerate(node.schemas):
            member = Factory.from_schema(node, member_schema)
            self.visit(member)
            if index == 0:
                node.add(member)
            else:
                self.context.trace("   [union]", f"dropping variant {index}")


def properties_of(node: Node) -> dict[str, Property]:
    """Properties a node contributes to an allOf merge."""
    if isinstance(node, Ref):
        return properties_of(node.target) if node.target is not None else {}
    if isinstance(node, (Object, Composed)):
        return dict(node.props)
    return {}


def select_properties(context: Context, node: Composed, candidates: dict[str, Property]) -> list[Property]:
    """
    Ask the oracle which candidate properties a composition keeps.

    "yes" keeps everything, "subset" asks for each property in order,
    "no" keeps nothing.

    Args:
        context: The traversal context holding the oracle
        node: The composition being merged
        candidates: Collected properties, in merge order

    Returns:
        The selected properties, in merge order
    """
    if not candidates:
        return []

    prompt = context.prompt
    names = ",\n - ".join(candidates)
    add_all = prompt.yes_no_select(f" -> Add all properties from {node.name or _owner_name(node)}?: \n - {names}\n")

    if add_all is Answer.YES:
        return list(candidates.values())
    if add_all is Answer.SUBSET:
        return [prop for prop in candidates.values() if prompt.yes_no(f"Add field '{prop.describe()}'?")]
    return []


def _owner_name(node: Node) -> str:
    parent = node.parent
    while parent is not None and parent.name is None:
        parent = parent.parent
    return f"[inline in {parent.name}]" if parent is not None else "[inline]"
