"""OpenAPI to GraphQL Generator

A Python package for generating GraphQL type definitions (SDL) and
selection sets from OpenAPI/Swagger documents, with interactive,
recorded or replayed field selection for allOf/oneOf compositions.
"""

__version__ = "0.1.0"

from .config import GeneratorConfig
from .converter import Converter
from .document import OpenApiDocument, Operation
from .errors import (
    ConverterError,
    GraphStateError,
    MalformedReferenceError,
    OutputConflictError,
    RecordingExhaustedError,
    RecordingFormatError,
    UnsupportedSchemaShapeError,
)
from .output import OutputWriter
from .prompt import Answer, Prompt, PromptFactory

__all__ = [
    "Converter",
    "GeneratorConfig",
    "OpenApiDocument",
    "Operation",
    "OutputWriter",
    "Answer",
    "Prompt",
    "PromptFactory",
    "ConverterError",
    "MalformedReferenceError",
    "UnsupportedSchemaShapeError",
    "RecordingExhaustedError",
    "RecordingFormatError",
    "OutputConflictError",
    "GraphStateError",
]
