"""
Configuration for the OpenAPI to GraphQL converter.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def _default_scalar_types() -> dict[str, str]:
    return {
        "string": "String",
        "integer": "Int",
        "number": "Float",
        "boolean": "Boolean",
    }


@dataclass
class GeneratorConfig:
    """Configuration options for SDL and selection-set generation."""

    # Add generation comment at top of the SDL output
    add_generation_comment: bool = True

    # Indentation of fields inside a `type { ... }` block
    field_indent: str = "  "

    # OpenAPI primitive type -> GraphQL scalar
    scalar_types: dict[str, str] = field(default_factory=_default_scalar_types)

    # Scalar used for free-form schemas (no type, or objects without properties)
    json_scalar: str = "JSON"

    # Name of the root query type
    query_type_name: str = "Query"

    # HTTP methods turned into query fields
    methods: list[str] = field(default_factory=lambda: ["get"])

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "field_indent": self.field_indent,
            "scalar_types": self.scalar_types,
            "json_scalar": self.json_scalar,
            "query_type_name": self.query_type_name,
            "methods": self.methods,
        }
