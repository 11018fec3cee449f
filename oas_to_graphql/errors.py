"""
Error taxonomy for the OpenAPI to GraphQL converter.

Every error is fatal: nothing is retried, the run is aborted and the
message is shown to the operator as-is.
"""

from __future__ import annotations


class ConverterError(Exception):
    """Base class for all converter errors."""

    pass


class MalformedReferenceError(ConverterError):
    """Raised when a $ref does not resolve to a declaration in the document."""

    pass


class UnsupportedSchemaShapeError(ConverterError):
    """Raised when a schema declaration cannot be classified.

    This can happen when:
    - A composed schema is neither allOf nor oneOf (e.g. anyOf)
    - A declared type is unknown to the converter
    - An array declares no items
    """

    pass


class RecordingExhaustedError(ConverterError):
    """Raised when the player runs out of recorded answers, or the recording is empty."""

    pass


class RecordingFormatError(ConverterError):
    """Raised when a recording line does not start with 'y', 'n' or 's'."""

    pass


class OutputConflictError(ConverterError):
    """Raised when an existing destination file cannot be deleted."""

    pass


class GraphStateError(ConverterError):
    """Raised when a node is queried for identity or dependencies before being visited."""

    pass
