"""
SDL generator: GraphQL type definitions from the visited graph.

Named objects and allOf compositions become `type` blocks; oneOf
compositions delegate to their retained variant; arrays are rendered
inline as lists. Anonymous objects used as property types are emitted as
their own types named after the owner type and the property.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from collections.abc import Iterable
from io import StringIO
from pathlib import Path
from typing import Any, TextIO

import jinja2

from .. import __version__
from ..graph import Array, Composed, ComposedKind, Node, Object, Parameter, Property, Ref, Scalar, Union
from ..utils import gen_field_name, gen_param_name, snake_to_pascal_case
from .base import Generator, is_compound

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent.resolve() / "templates" / "graphql"


class SdlGenerator(Generator):
    """Writes GraphQL SDL."""

    def __init__(self, context):
        super().__init__(context)
        self.jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True, keep_trailing_newline=True)
        self.type_template = self.jinja_env.from_string((TEMPLATES_DIR / "type.graphql.jinja2").read_text(encoding="utf-8"))

        self._inline_names: dict[Node, str] = {}
        self._taken_names: set[str] = set()
        self._pending: deque[Node] = deque()
        self._generated_variants: set[Node] = set()
        self._uses_json = False

    def write(self, roots: Iterable[Node], writer: TextIO, query: Object | None = None) -> None:
        """
        Write type definitions for the roots, then the query type.

        Args:
            roots: Visited named nodes, usually the type store in insertion order
            writer: Destination stream
            query: Visited query object, one property per operation
        """
        roots = list(roots)
        self._taken_names.update(node.simple_name for node in roots if node.name)
        self._taken_names.add(self.config.query_type_name)
        for node in roots:
            self._name_variant(node)

        body = StringIO()
        for node in roots:
            self.generate(node, body)
            self._flush_pending(body)

        if query is not None and query.props:
            with self.context.entered(query):
                self._write_type(self.config.query_type_name, query.props.values(), body)
            self._flush_pending(body)

        if self.config.add_generation_comment:
            writer.write(f"# Generated by oas_to_graphql {__version__}\n\n")
        if self._uses_json:
            writer.write(f"scalar {self.config.json_scalar}\n\n")
        writer.write(body.getvalue())

    def generate(self, node: Node, writer: TextIO) -> None:
        """Write the type definition for one node, if it has one."""
        with self.context.entered(node):
            self.context.trace("-> [generate]", f"in: {node.name or type(node).__name__}")

            if isinstance(node, Object):
                if not node.is_free_form:
                    self._write_type(self.type_name(node), node.props.values(), writer)
            elif isinstance(node, Composed):
                if node.kind is ComposedKind.ONE_OF:
                    self._generate_variant(node, node.union.variant, writer)
                elif node.props:
                    self._write_type(self.type_name(node), node.props.values(), writer)
            elif isinstance(node, Union):
                self._generate_variant(node, node.variant, writer)
            elif not isinstance(node, (Ref, Array, Scalar)):
                raise TypeError(f"Cannot generate a type definition for {node!r}")

            self.context.trace("<- [generate]", f"out: {node.name or type(node).__name__}")

    def type_name(self, node: Node) -> str:
        """GraphQL type name of a named or inline-named compound node."""
        if node.name is not None:
            return node.simple_name
        name = self._inline_names.get(node)
        if name is None:
            logger.warning("No type name for anonymous %s, using %s", type(node).__name__, self.config.json_scalar)
            self._uses_json = True
            return self.config.json_scalar
        return name

    def type_expr(self, node: Node | None, seen: frozenset = frozenset()) -> str:
        """GraphQL type expression for a value of the given node."""
        if node is None or node in seen:
            return self._json()
        seen = seen | {node}

        if isinstance(node, Scalar):
            if node.type_name is None:
                return self._json()
            return self.config.scalar_types.get(node.type_name, node.type_name)
        if isinstance(node, Object):
            return self._json() if node.is_free_form else self.type_name(node)
        if isinstance(node, Array):
            return f"[{self.type_expr(node.items, seen)}]"
        if isinstance(node, Ref):
            return self.type_expr(node.target, seen)
        if isinstance(node, Composed):
            if node.kind is ComposedKind.ONE_OF:
                return self.type_expr(node.union.variant, seen)
            return self.type_name(node) if node.props else self._json()
        if isinstance(node, Union):
            return self.type_expr(node.variant, seen)
        if isinstance(node, (Property, Parameter)):
            return self.type_expr(_value_type(node), seen)
        raise TypeError(f"Cannot render a type expression for {node!r}")

    def field(self, prop: Property, owner_name: str) -> str:
        """One field line: `name(args): Type! = default`."""
        self._name_inline(_value_type(prop), owner_name + snake_to_pascal_case(prop.name))

        line = gen_field_name(prop.name)
        if prop.arguments:
            line += "(" + ", ".join(self.argument(param) for param in prop.arguments) + ")"
        line += ": " + self.type_expr(prop.value_type)
        return line + _modifiers(prop.required, prop.default_value)

    def argument(self, param: Parameter) -> str:
        """One argument: `name: Type! = default`; compound inputs use the JSON scalar."""
        if is_compound(param.type_node):
            type_expr = self._json()
        else:
            type_expr = self.type_expr(param.type_node)
        return f"{gen_param_name(param.name)}: {type_expr}" + _modifiers(param.required, param.default_value)

    def _write_type(self, name: str, props: Iterable[Property], writer: TextIO) -> None:
        fields = [self.field(prop, name) for prop in props]
        writer.write(self.type_template.render(name=name, fields=fields, indent=self.config.field_indent))

    def _generate_variant(self, node: Node, variant: Node, writer: TextIO) -> None:
        """A oneOf is generated as its retained variant; an anonymous variant takes the composition's name."""
        if self._name_variant(node) and variant not in self._generated_variants:
            self._generated_variants.add(variant)
            self.generate(variant, writer)

    def _name_variant(self, node: Node) -> bool:
        """Give the anonymous variant of a named oneOf the composition's name; True if it owns that name."""
        if isinstance(node, Composed) and node.kind is ComposedKind.ONE_OF:
            variant = node.union.variant
        elif isinstance(node, Union):
            variant = node.variant
        else:
            return False
        if node.name is None or not _is_anonymous(variant):
            return False
        return self._inline_names.setdefault(variant, node.simple_name) == node.simple_name

    def _name_inline(self, node: Node | None, name: str) -> None:
        """Name and queue the anonymous compound type reachable from a field, if any."""
        while isinstance(node, (Array, Union, Composed)):
            if isinstance(node, Array):
                node = node.items
            elif isinstance(node, Union):
                node = node.variant
            elif node.kind is ComposedKind.ONE_OF and node.name is None:
                node = node.union.variant
            else:
                break

        if not _is_anonymous(node) or node in self._inline_names:
            return

        unique, counter = name, 2
        while unique in self._taken_names:
            unique, counter = f"{name}{counter}", counter + 1
        self._taken_names.add(unique)
        self._inline_names[node] = unique
        self._pending.append(node)

    def _flush_pending(self, writer: TextIO) -> None:
        while self._pending:
            self.generate(self._pending.popleft(), writer)

    def _json(self) -> str:
        self._uses_json = True
        return self.config.json_scalar


def format_default_value(value: Any) -> str | None:
    """
    Render a default value; best effort.

    Numbers are emitted verbatim and strings quoted. Any other kind
    (booleans, lists, objects, null) has no rendering and yields None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return None


def _modifiers(required: bool, default_value: Any) -> str:
    suffix = "!" if required else ""
    default = format_default_value(default_value)
    if default is not None:
        suffix += f" = {default}"
    return suffix


def _value_type(node: Property | Parameter) -> Node | None:
    return node.value_type if isinstance(node, Property) else node.type_node


def _is_anonymous(node: Node | None) -> bool:
    if node is None or node.name is not None:
        return False
    if isinstance(node, Object):
        return not node.is_free_form
    return isinstance(node, Composed) and node.kind is ComposedKind.ALL_OF and bool(node.props)
