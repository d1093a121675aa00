"""Tests for per-request schema resolution."""

import asyncio
import threading

import pytest

from gql_faker.core.errors import CompositionError, SchemaNotFoundError
from gql_faker.core.models import GraphQLRequest
from gql_faker.core.resolution import SchemaResolver

from .conftest import VALID_IDL


@pytest.fixture
def resolver(store, composer):
    return SchemaResolver(store, composer, forward_headers=["Authorization", "x-tenant"])


class TestSchemaResolver:
    """Tests for SchemaResolver."""

    def test_resolve_default(self, resolver, store):
        store.write(None, VALID_IDL)
        resolved = resolver.resolve(None)
        assert resolved.name is None
        assert "hello" in resolved.schema.query_type.fields

    def test_resolve_named(self, resolver, store):
        store.write("pets", "type Query { pets: [String] }")
        resolved = resolver.resolve("pets")
        assert "pets" in resolved.schema.query_type.fields

    def test_not_found(self, resolver):
        with pytest.raises(SchemaNotFoundError) as exc_info:
            resolver.resolve("unknown-schema")
        assert "unknown-schema" in exc_info.value.message

    def test_corrupted_idl_is_hard_error(self, resolver, store):
        store.write(None, "type Query {")
        with pytest.raises(CompositionError):
            resolver.resolve(None)

    def test_recomposes_every_request(self, resolver, store):
        store.write(None, VALID_IDL)
        first = resolver.resolve(None).schema
        store.write(None, "type Query { goodbye: Int }")
        second = resolver.resolve(None).schema
        assert first is not second
        assert "goodbye" in second.query_type.fields

    def test_forward_headers_allow_list(self, resolver, store):
        store.write(None, VALID_IDL)
        resolved = resolver.resolve(None, {
            "Authorization": "bearer abc",
            "X-Tenant": "acme",
            "Cookie": "secret",
        })
        assert resolved.forward_headers == {"authorization": "bearer abc", "x-tenant": "acme"}

    def test_no_forward_headers_configured(self, store, composer):
        store.write(None, VALID_IDL)
        resolved = SchemaResolver(store, composer).resolve(None, {"Authorization": "x"})
        assert resolved.forward_headers == {}


class TestExecute:
    """Tests for SchemaResolver.execute."""

    def test_execute_query(self, resolver, store):
        store.write(None, VALID_IDL)
        result = asyncio.run(resolver.execute(None, GraphQLRequest(query="{ hello }")))
        assert result.errors is None
        assert isinstance(result.data["hello"], str)

    def test_execute_with_variables(self, resolver, store):
        store.write(None, "type Query { echo(text: String!): String }")
        request = GraphQLRequest.model_validate({
            "query": "query Echo($t: String!) { echo(text: $t) }",
            "variables": {"t": "hi"},
            "operationName": "Echo",
        })
        result = asyncio.run(resolver.execute(None, request))
        assert result.errors is None
        assert result.data["echo"] is not None

    def test_execute_invalid_query(self, resolver, store):
        store.write(None, VALID_IDL)
        result = asyncio.run(resolver.execute(None, GraphQLRequest(query="{ nope }")))
        assert result.data is None
        assert "nope" in result.errors[0].message

    def test_resolve_runs_off_event_loop(self, resolver, store, monkeypatch):
        store.write(None, VALID_IDL)
        resolve = resolver.resolve
        threads = []

        def recording_resolve(name, headers=None):
            threads.append(threading.current_thread())
            return resolve(name, headers)

        monkeypatch.setattr(resolver, "resolve", recording_resolve)

        async def scenario():
            result = await resolver.execute(None, GraphQLRequest(query="{ hello }"))
            return threading.current_thread(), result

        loop_thread, result = asyncio.run(scenario())
        assert result.errors is None
        assert threads and threads[0] is not loop_thread
