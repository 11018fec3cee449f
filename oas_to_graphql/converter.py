"""
Converter - OpenAPI to GraphQL generation entry point.

Two phases per run:

1. Visit: build the type graph from the document, resolving $refs on demand
   and asking the decision oracle at composition boundaries
2. Generate: walk the visited graph to write SDL or selection sets
"""

from __future__ import annotations

import logging
from io import StringIO

from .config import GeneratorConfig
from .document import OpenApiDocument, Operation
from .generators import SdlGenerator, SelectionGenerator
from .graph import Context, Factory, GraphBuilder, Object, Property
from .prompt import Prompt, PromptFactory
from .utils import gen_operation_name

logger = logging.getLogger(__name__)


class Converter:
    """Converts an OpenAPI document to GraphQL SDL or selection sets."""

    def __init__(
        self,
        document: OpenApiDocument,
        config: GeneratorConfig | None = None,
        prompt: Prompt | None = None,
    ):
        """
        Initialize the converter.

        Args:
            document: The OpenAPI document
            config: Generation configuration
            prompt: Decision oracle; answers yes to everything when None
        """
        self.document = document
        self.config = config or GeneratorConfig()
        self.prompt = prompt or PromptFactory.yes()

    def generate_sdl(self) -> str:
        """
        Generate GraphQL type definitions.

        Every named schema is visited in declaration order, then every
        operation becomes a field of the query type.

        Returns:
            The SDL text
        """
        context = self.new_context()
        builder = GraphBuilder(context)

        for ref in self.document.schemas():
            builder.resolve(None, ref)

        query = self.build_query(context, self.document.operations(self.config.methods))
        builder.visit(query)

        out = StringIO()
        SdlGenerator(context).write(list(context.types.values()), out, query=query)
        return out.getvalue()

    def generate_selection(self) -> str:
        """
        Generate selection sets, one root field per selected operation.

        The oracle is asked whether to visit each operation's path.

        Returns:
            The selection-set text
        """
        context = self.new_context()
        builder = GraphBuilder(context)
        generator = SelectionGenerator(context)
        query = Object(name=self.config.query_type_name)

        out = StringIO()
        for operation in self.document.operations(self.config.methods):
            if not context.prompt.yes_no(f"Visit path {operation}?"):
                logger.info("Skipping path %s", operation)
                continue

            logger.info("Visiting path %s", operation)
            field = self.operation_field(query, operation)
            query.put(field)
            builder.visit(field)
            generator.select(field, out)

        return out.getvalue()

    def new_context(self) -> Context:
        return Context(self.document, self.prompt, self.config)

    def build_query(self, context: Context, operations: list[Operation]) -> Object:
        """Unvisited query object with one field per operation."""
        query = Object(name=self.config.query_type_name)
        for operation in operations:
            query.put(self.operation_field(query, operation))
        return query

    def operation_field(self, query: Object, operation: Operation) -> Property:
        """Query field for an operation: its response type, with its parameters as arguments."""
        name = gen_operation_name(operation.method, operation.path, operation.operation_id)
        field = Factory.from_property(query, name, operation.response_schema or {})

        for parameter in self.document.list_parameters(operation):
            field.arguments.append(
                Factory.from_parameter(
                    field,
                    parameter["name"],
                    self.document.parameter_schema(parameter),
                    bool(parameter.get("required", False)),
                )
            )
        return field
