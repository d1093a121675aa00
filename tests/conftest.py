"""Shared fixtures."""

import pytest

from gql_faker.core.composer import SchemaComposer
from gql_faker.core.store import IDLStore

VALID_IDL = "type Query { hello: String }"

BASE_IDL = """
type User {
  id: ID!
  name: String
}

type Query {
  user(id: ID!): User
}
"""


@pytest.fixture(scope="session")
def composer():
    return SchemaComposer()


@pytest.fixture
def store(tmp_path):
    return IDLStore(tmp_path / "schemas")
