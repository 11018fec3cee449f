"""
Naming utilities: turn OpenAPI names and $ref strings into GraphQL identifiers.
"""

from __future__ import annotations

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

# Characters not allowed in a GraphQL name
_ILLEGAL_NAME_CHARS = re.compile(r"[^_0-9A-Za-z]")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots) to spaces."""
    return text.replace("_", " ").replace("-", " ").replace(".", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word[0].upper() + word[1:] for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case, camelCase or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "pet-store" -> "PetStore"
        "actionTemplate" -> "ActionTemplate"
        "first 3 rows" -> "First3Rows"
        "Pet" -> "Pet"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def _legal_name(text: str) -> str:
    name = _ILLEGAL_NAME_CHARS.sub("_", text)
    if not name or name[0].isdigit():
        name = "_" + name
    return name


def get_ref_name(ref: str) -> str:
    """Type name for a $ref or a plain schema name.

    Examples:
        "#/components/schemas/Pet" -> "Pet"
        "#/definitions/pet_owner" -> "PetOwner"
    """
    segment = ref.rsplit("/", 1)[-1].replace("~1", "/").replace("~0", "~")
    return _legal_name(snake_to_pascal_case(segment) or segment)


def gen_field_name(name: str) -> str:
    """Legal GraphQL field name for a property name."""
    return _legal_name(name)


def gen_param_name(name: str) -> str:
    """Legal GraphQL argument name for an operation parameter (e.g. 'X-Request-Id' -> 'X_Request_Id')."""
    return _legal_name(name)


def sanitise_field_for_select(name: str) -> str:
    """Field name as written in a selection set ('@type' -> 'type')."""
    if name.startswith("@"):
        name = name[1:]
    return _legal_name(name)


def gen_operation_name(method: str, path: str, operation_id: str | None = None) -> str:
    """Query field name for an operation.

    The operationId is used when present, otherwise the method and path words:
        ("get", "/pets/{petId}") -> "getPetsPetId"
    """
    if operation_id:
        return _legal_name(operation_id)
    words = snake_to_pascal_case(re.sub(r"[{}/]", " ", path))
    return _legal_name(method.lower() + words)
