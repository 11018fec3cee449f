"""
Factory dispatching raw schema declarations to graph nodes.
"""

from __future__ import annotations

from typing import Any

from ..errors import UnsupportedSchemaShapeError
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


class Factory:
    """Builds unvisited nodes from raw schema declarations."""

    # Primitive type names
    PRIMITIVE_TYPES = {"string", "integer", "number", "boolean"}

    @staticmethod
    def from_schema(parent: Node | None, schema: dict[str, Any]) -> Node:
        """
        Build the node for a schema declaration.

        Dispatch, in priority order: $ref, allOf/oneOf, array, object, scalar.

        Args:
            parent: The owning node
            schema: The raw declaration

        Returns:
            An unvisited node

        Raises:
            UnsupportedSchemaShapeError: If the declaration cannot be classified
        """
        if not isinstance(schema, dict):
            raise UnsupportedSchemaShapeError(f"Unsupported schema kind: {schema!r} (under {_owner(parent)})")

        if "$ref" in schema:
            return Ref(parent=parent, ref=schema["$ref"])

        if "allOf" in schema:
            return Composed(parent=parent, kind=ComposedKind.ALL_OF, schema=schema)
        if "oneOf" in schema:
            return Composed(parent=parent, kind=ComposedKind.ONE_OF, schema=schema)
        if "anyOf" in schema or "not" in schema:
            raise UnsupportedSchemaShapeError(f"Unsupported composed schema: {sorted(schema)} (under {_owner(parent)})")

        type_name = Factory._type_name(schema, parent)

        if type_name == "array":
            if not isinstance(schema.get("items"), dict):
                raise UnsupportedSchemaShapeError(f"Unsupported schema kind: array without items (under {_owner(parent)})")
            array = Array(parent=parent)
            array.items = Factory.from_schema(array, schema["items"])
            array.add(array.items)
            return array

        if type_name == "object" or "properties" in schema:
            obj = Object(parent=parent, schema=schema)
            required = set(schema.get("required") or [])
            for name, prop_schema in (schema.get("properties") or {}).items():
                obj.put(Factory.from_property(obj, name, prop_schema, name in required))
            return obj

        if type_name is None or type_name in Factory.PRIMITIVE_TYPES:
            return Scalar(parent=parent, type_name=type_name, schema=schema)

        raise UnsupportedSchemaShapeError(f"Unsupported schema kind: type '{type_name}' (under {_owner(parent)})")

    @staticmethod
    def from_property(parent: Node, name: str, schema: dict[str, Any], required: bool = False) -> Property:
        """Build a Property, or a PropertyRef when the declaration is a $ref."""
        default_value = schema.get("default") if isinstance(schema, dict) else None
        if isinstance(schema, dict) and "$ref" in schema:
            return PropertyRef(
                parent=parent,
                name=name,
                schema=schema,
                required=required,
                default_value=default_value,
                ref=schema["$ref"],
            )

        prop = Property(parent=parent, name=name, schema=schema, required=required, default_value=default_value)
        prop.type_node = Factory.from_schema(prop, schema)
        prop.add(prop.type_node)
        return prop

    @staticmethod
    def from_union(parent: Node, schemas: list[dict[str, Any]]) -> Union:
        """Build a Union over the member declarations; members are built while visiting."""
        return Union(parent=parent, schemas=list(schemas))

    @staticmethod
    def from_parameter(parent: Node, name: str, schema: dict[str, Any], required: bool = False) -> Parameter:
        """Build an operation Parameter with its type."""
        param = Parameter(parent=parent, name=name, schema=schema, required=required, default_value=schema.get("default"))
        param.type_node = Factory.from_schema(param, schema)
        param.add(param.type_node)
        return param

    @staticmethod
    def _type_name(schema: dict[str, Any], parent: Node | None) -> str | None:
        type_name = schema.get("type")
        if isinstance(type_name, list):
            # OpenAPI 3.1: ["string", "null"]
            non_null = [t for t in type_name if t != "null"]
            if len(non_null) != 1:
                raise UnsupportedSchemaShapeError(f"Unsupported schema kind: type {type_name} (under {_owner(parent)})")
            type_name = non_null[0]
        if type_name is None and "enum" in schema:
            return "string"
        return type_name


def _owner(parent: Node | None) -> str:
    while parent is not None and parent.name is None:
        parent = parent.parent
    return parent.name if parent is not None else "[root]"
