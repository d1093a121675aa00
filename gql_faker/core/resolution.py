"""Per-request schema resolution and execution.

Every request reads the named IDL from the store and composes it from
scratch; nothing is cached between requests, so the store stays the only
source of truth.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from graphql import ExecutionResult, GraphQLSchema, graphql

from .composer import SchemaComposer
from .faker import FakeResolvers
from .models import GraphQLRequest
from .store import IDLStore

logger = logging.getLogger(__name__)


@dataclass
class ResolvedSchema:
    """A schema composed for one request, with the headers it may forward."""

    name: str | None
    schema: GraphQLSchema
    forward_headers: dict[str, str] = field(default_factory=dict)


class SchemaResolver:
    """Resolves a schema name to an executable schema for a single request.

    Args:
        store: Where IDL documents are read from
        composer: The composer shared with the editor
        forward_headers: Allow-list of request header names to forward
        resolvers: Fake data resolvers used during execution
    """

    def __init__(
        self,
        store: IDLStore,
        composer: SchemaComposer,
        forward_headers: list[str] | None = None,
        resolvers: FakeResolvers | None = None,
    ):
        self.store = store
        self.composer = composer
        self.forward_headers = [name.lower() for name in forward_headers or []]
        self.resolvers = resolvers or FakeResolvers()

    def resolve(self, name: str | None, headers: Mapping[str, str] | None = None) -> ResolvedSchema:
        """Load and compose the named schema.

        Raises:
            SchemaNotFoundError: If nothing is stored under ``name``
            CompositionError: If the stored IDL does not compose
        """
        idl = self.store.read(name)
        schema = self.composer.compose(idl, source_name=str(self.store.path_for(name)))
        return ResolvedSchema(
            name=name,
            schema=schema,
            forward_headers=self.pick_headers(headers or {}),
        )

    def pick_headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        """Keep only allow-listed headers, keyed by lower-cased name."""
        picked = {}
        for key, value in headers.items():
            if key.lower() in self.forward_headers:
                picked[key.lower()] = value
        return picked

    async def execute(
        self,
        name: str | None,
        request: GraphQLRequest,
        headers: Mapping[str, str] | None = None,
    ) -> ExecutionResult:
        """Resolve the schema and run one GraphQL request against it."""
        # Reading and composing block, so they run off the event loop.
        resolved = await asyncio.to_thread(self.resolve, name, headers)
        logger.debug(
            "Executing %s against schema %r", request.operation_name or "operation", name or "default"
        )
        return await graphql(
            resolved.schema,
            request.query,
            variable_values=request.variables,
            operation_name=request.operation_name,
            context_value={"headers": resolved.forward_headers, "schema_name": name},
            field_resolver=self.resolvers.field_resolver,
            type_resolver=self.resolvers.type_resolver,
        )
