"""
OpenAPI / Swagger document model.

Loads a JSON or YAML document and gives the converter the few things it
consumes: $ref lookup, the named schemas and the operations with their
parameters and response schema.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import MalformedReferenceError

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Parameter keys that describe the parameter itself, not its type (Swagger 2)
_PARAMETER_KEYS = {"name", "in", "required", "description", "allowEmptyValue", "collectionFormat"}


@dataclass
class Operation:
    """A single path operation."""

    path: str = ""
    method: str = ""
    operation_id: str | None = None
    parameters: list[dict[str, Any]] = field(default_factory=list)
    response_schema: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.method.upper()} {self.path}"


class OpenApiDocument:
    """An OpenAPI 3 or Swagger 2 document."""

    def __init__(self, raw: dict[str, Any]):
        """
        Initialize the document.

        Args:
            raw: The parsed document
        """
        self.raw = raw or {}

    @staticmethod
    def from_file(path: str | Path) -> OpenApiDocument:
        """Load a document from a .json, .yaml or .yml file."""
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                raw = json.load(f)
            else:
                raw = yaml.safe_load(f)
        logger.info("Loaded %s", path.name)
        return OpenApiDocument(raw)

    @property
    def is_swagger(self) -> bool:
        return "swagger" in self.raw

    def schemas(self) -> dict[str, dict[str, Any]]:
        """Named schemas in declaration order, keyed by their $ref."""
        if self.is_swagger:
            prefix, schemas = "#/definitions/", self.raw.get("definitions") or {}
        else:
            prefix, schemas = "#/components/schemas/", (self.raw.get("components") or {}).get("schemas") or {}
        return {prefix + _escape_pointer(name): schema for name, schema in schemas.items()}

    def lookup_ref(self, ref: str) -> dict[str, Any]:
        """
        Resolve a local $ref to its declaration.

        Args:
            ref: A JSON pointer such as "#/components/schemas/Pet"

        Returns:
            The raw declaration

        Raises:
            MalformedReferenceError: If the ref is external or does not resolve
        """
        if not ref.startswith("#/"):
            raise MalformedReferenceError(f"Unsupported $ref '{ref}': only local references are supported")

        node: Any = self.raw
        for part in ref[2:].split("/"):
            part = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(node, dict) or part not in node:
                raise MalformedReferenceError(f"Could not resolve $ref '{ref}'")
            node = node[part]

        if not isinstance(node, dict):
            raise MalformedReferenceError(f"$ref '{ref}' does not point to a schema declaration")
        return node

    def operations(self, methods: list[str] | None = None) -> list[Operation]:
        """
        Operations in document order.

        Args:
            methods: HTTP methods to keep (all methods when None)

        Returns:
            List of operations with resolved parameters and response schema
        """
        wanted = [m.lower() for m in methods] if methods else list(HTTP_METHODS)
        operations = []
        for path, item in (self.raw.get("paths") or {}).items():
            if "$ref" in item:
                item = self.lookup_ref(item["$ref"])
            for method, raw_operation in item.items():
                if method not in HTTP_METHODS or method not in wanted:
                    continue
                operations.append(
                    Operation(
                        path=path,
                        method=method,
                        operation_id=raw_operation.get("operationId"),
                        parameters=self._merge_parameters(item.get("parameters") or [], raw_operation.get("parameters") or []),
                        response_schema=self._response_schema(raw_operation),
                    )
                )
        return operations

    def list_parameters(self, operation: Operation) -> list[dict[str, Any]]:
        """Ordered parameter declarations of an operation (body parameters excluded)."""
        return [p for p in operation.parameters if p.get("in") != "body"]

    def parameter_schema(self, parameter: dict[str, Any]) -> dict[str, Any]:
        """Schema of a parameter; Swagger 2 parameters carry their type inline."""
        if "schema" in parameter:
            return parameter["schema"]
        return {k: v for k, v in parameter.items() if k not in _PARAMETER_KEYS}

    def _merge_parameters(self, path_level: list, operation_level: list) -> list[dict[str, Any]]:
        """Path-level parameters overridden by operation-level ones (same name and location)."""
        merged: dict[tuple[str, str], dict[str, Any]] = {}
        for parameter in list(path_level) + list(operation_level):
            if "$ref" in parameter:
                parameter = self.lookup_ref(parameter["$ref"])
            merged[(parameter.get("name", ""), parameter.get("in", ""))] = parameter
        return list(merged.values())

    def _response_schema(self, raw_operation: dict[str, Any]) -> dict[str, Any] | None:
        """Schema of the first 2xx response, falling back to 'default'."""
        responses = raw_operation.get("responses") or {}
        codes = [code for code in responses if str(code).startswith("2")]
        if "default" in responses:
            codes.append("default")

        for code in codes:
            response = responses[code]
            if "$ref" in response:
                response = self.lookup_ref(response["$ref"])
            if "schema" in response:
                return response["schema"]
            content = response.get("content") or {}
            media = content.get("application/json") or next(iter(content.values()), None)
            if media and "schema" in media:
                return media["schema"]
        return None


def _escape_pointer(name: str) -> str:
    return name.replace("~", "~0").replace("/", "~1")
