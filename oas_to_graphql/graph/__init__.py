"""
Type graph module.

Contains the node taxonomy, the traversal context, the factory and the
visit protocol that builds the graph from an OpenAPI document.
"""

from __future__ import annotations

from .context import Context, TypeStore
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
from .visitor import GraphBuilder

__all__ = [
    "Node",
    "Scalar",
    "Object",
    "Array",
    "Union",
    "Composed",
    "ComposedKind",
    "Ref",
    "Property",
    "PropertyRef",
    "Parameter",
    "Context",
    "TypeStore",
    "Factory",
    "GraphBuilder",
]
