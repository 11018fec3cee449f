"""
Type graph node definitions.

The graph is built lazily by the GraphBuilder while visiting the document.
The set of node kinds is closed: phases dispatch on the concrete class and
fail with UnsupportedSchemaShapeError on anything else.

Nodes are compared by object identity; `id()` gives the structural identity
used for de-duplication, and is only defined once the node has been visited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import GraphStateError
from ..utils import get_ref_name


class ComposedKind(Enum):
    """Kind of a composed schema."""

    ALL_OF = "allOf"
    ONE_OF = "oneOf"


@dataclass(eq=False)
class Node:
    """Base class for all graph nodes."""

    # Non-owning back-reference, used for traversal and naming only
    parent: Node | None = field(default=None, repr=False)
    name: str | None = None
    children: list[Node] = field(default_factory=list, repr=False)
    visited: bool = False

    # Property bag: name -> property, in declaration order
    props: dict[str, Property] = field(default_factory=dict, repr=False)

    def id(self) -> str:
        """Structural identity of the node."""
        self._require_visited("identity")
        return self._id()

    def dependencies(self) -> list[Node]:
        """Nodes whose output this node refers to."""
        self._require_visited("dependencies")
        return self._dependencies()

    def add(self, child: Node) -> None:
        if child not in self.children:
            self.children.append(child)

    def put(self, prop: Property) -> None:
        """Add or overwrite a property, keeping its first position."""
        previous = self.props.get(prop.name)
        self.props[prop.name] = prop
        if previous is not None and previous in self.children:
            self.children[self.children.index(previous)] = prop
        else:
            self.add(prop)

    @property
    def simple_name(self) -> str | None:
        return get_ref_name(self.name) if self.name else None

    def _id(self) -> str:
        raise NotImplementedError

    def _dependencies(self) -> list[Node]:
        return []

    def _require_visited(self, query: str) -> None:
        if not self.visited:
            raise GraphStateError(f"{self!r} should have been visited before asking for {query}")


@dataclass(eq=False)
class Scalar(Node):
    """A primitive leaf: string, integer, number, boolean, or free-form JSON."""

    type_name: str | None = None  # None for free-form schemas
    schema: dict[str, Any] = field(default_factory=dict, repr=False)

    def _id(self) -> str:
        return f"scalar:{self.type_name or 'json'}"


@dataclass(eq=False)
class Object(Node):
    """An object with named properties."""

    schema: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_free_form(self) -> bool:
        """An object without declared properties, rendered as the JSON scalar."""
        return not self.props

    def _id(self) -> str:
        if self.name:
            return f"obj://{self.name}"
        return "obj:inline://{" + ",".join(self.props) + "}"

    def _dependencies(self) -> list[Node]:
        return [dep for prop in self.props.values() for dep in prop.dependencies()]


@dataclass(eq=False)
class Array(Node):
    """An array wrapping exactly one items node."""

    items: Node | None = None

    def _id(self) -> str:
        return f"array:{self.items.id()}"

    def _dependencies(self) -> list[Node]:
        return [self.items]


@dataclass(eq=False)
class Union(Node):
    """Exactly one of several shapes; holds the single retained variant once visited."""

    schemas: list[dict[str, Any]] = field(default_factory=list, repr=False)

    @property
    def variant(self) -> Node:
        return self.children[0]

    def _id(self) -> str:
        return "union://" + " + ".join(child.id() for child in self.children)

    def _dependencies(self) -> list[Node]:
        return list(self.children)


@dataclass(eq=False)
class Composed(Node):
    """An allOf or oneOf composition."""

    kind: ComposedKind = ComposedKind.ALL_OF
    schema: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def union(self) -> Union:
        return self.children[0]

    def _id(self) -> str:
        refs = " + ".join(child.id() for child in self.children)
        if self.kind is ComposedKind.ALL_OF:
            return "comp:all-of://" + refs
        return "comp:one-of://" + refs

    def _dependencies(self) -> list[Node]:
        if self.kind is ComposedKind.ONE_OF:
            return list(self.children)
        return [dep for prop in self.props.values() for dep in prop.dependencies()]


@dataclass(eq=False)
class Ref(Node):
    """A schema-level $ref (e.g. an allOf member or array items)."""

    ref: str = ""
    target: Node | None = None  # Filled in during visit

    def _id(self) -> str:
        return f"ref:{self.ref}"

    def _dependencies(self) -> list[Node]:
        return [self.target]


@dataclass(eq=False)
class Property(Node):
    """A named, typed member of an object or composition."""

    schema: dict[str, Any] = field(default_factory=dict, repr=False)
    required: bool = False
    default_value: Any = None
    type_node: Node | None = None

    # Operation parameters, for query fields only
    arguments: list[Parameter] = field(default_factory=list, repr=False)

    @property
    def value_type(self) -> Node | None:
        """The node describing the property's value."""
        return self.type_node

    def _id(self) -> str:
        return f"prop:{self.name}"

    def _dependencies(self) -> list[Node]:
        return [self.value_type]

    def describe(self) -> str:
        """Short 'name: Type' form used in prompts."""
        node = self.value_type
        if isinstance(node, Ref):
            return f"{self.name}: {get_ref_name(node.ref)}"
        kind = getattr(node, "type_name", None) or type(node).__name__.lower()
        return f"{self.name}: {kind}"


@dataclass(eq=False)
class PropertyRef(Property):
    """A property whose type is a $ref; `ref_type` is None until visited."""

    ref: str = ""
    ref_type: Node | None = None

    @property
    def value_type(self) -> Node | None:
        return self.ref_type

    def _id(self) -> str:
        return f"prop:ref:{self.ref}"

    def describe(self) -> str:
        return f"{self.name}: {get_ref_name(self.ref)}"


@dataclass(eq=False)
class Parameter(Node):
    """A named, schema-typed operation input."""

    schema: dict[str, Any] = field(default_factory=dict, repr=False)
    required: bool = False
    default_value: Any = None
    type_node: Node | None = None

    def _id(self) -> str:
        return f"param:{self.name}"

    def _dependencies(self) -> list[Node]:
        return [self.type_node]
