"""Tests for schema composition."""

import pytest
from graphql import GraphQLSchema, lexicographic_sort_schema

from gql_faker.core.composer import SchemaComposer, load_fake_definition
from gql_faker.core.errors import CompositionError

from .conftest import BASE_IDL, VALID_IDL


class TestCompose:
    """Tests for composing standalone schemas."""

    def test_valid_idl(self, composer):
        schema = composer.compose(VALID_IDL)
        assert isinstance(schema, GraphQLSchema)
        assert "hello" in schema.query_type.fields

    def test_fake_directives_are_merged(self, composer):
        schema = composer.compose(VALID_IDL)
        assert schema.get_directive("fake") is not None
        assert schema.get_directive("examples") is not None
        assert schema.get_directive("listLength") is not None
        assert schema.get_type("fake__Types") is not None

    def test_directives_usable_in_idl(self, composer):
        idl = """
        type Query {
          email: String @fake(type: email)
          tags: [String] @listLength(min: 1, max: 2) @examples(values: ["a", "b"])
        }
        """
        schema = composer.compose(idl)
        assert set(schema.query_type.fields) == {"email", "tags"}

    def test_unbalanced_braces(self, composer):
        with pytest.raises(CompositionError) as exc_info:
            composer.compose("type Query { hello: String")
        assert exc_info.value.message

    def test_unterminated_string(self, composer):
        with pytest.raises(CompositionError) as exc_info:
            composer.compose('type Query { hello: String @examples(values: ["abc) }')
        assert "Unterminated string" in exc_info.value.message

    def test_undefined_type(self, composer):
        with pytest.raises(CompositionError) as exc_info:
            composer.compose("type Query { foo: Foo }")
        assert "Foo" in exc_info.value.message

    def test_missing_query_type(self, composer):
        with pytest.raises(CompositionError) as exc_info:
            composer.compose("type User { id: ID }")
        assert "Query" in exc_info.value.message

    def test_invalid_directive_usage(self, composer):
        with pytest.raises(CompositionError):
            composer.compose("type Query { hello: String @fake(kind: email) }")

    def test_duplicate_type(self, composer):
        with pytest.raises(CompositionError):
            composer.compose("type Query { a: String } type Query { b: String }")

    def test_try_compose(self, composer):
        assert composer.try_compose(VALID_IDL) is not None
        assert composer.try_compose("type Query {") is None

    def test_same_input_same_schema(self, composer):
        first = composer.print_user_schema(composer.compose(BASE_IDL))
        second = composer.print_user_schema(composer.compose(BASE_IDL))
        assert first == second


class TestPrintUserSchema:
    """Tests for printing without the auxiliary fragment."""

    def test_excludes_fake_definitions(self, composer):
        printed = composer.print_user_schema(composer.compose(VALID_IDL))
        assert "fake__Types" not in printed
        assert "directive @fake" not in printed
        assert "examples__JSON" not in printed

    @pytest.mark.parametrize(
        "idl",
        [
            VALID_IDL,
            BASE_IDL,
            """
            interface Node { id: ID! }
            enum Color { RED GREEN }
            type Pet implements Node { id: ID! color: Color }
            union Result = Pet
            input PetFilter { color: Color }
            type Query { pets(filter: PetFilter): [Pet!]! search: Result }
            """,
        ],
    )
    def test_round_trip(self, composer, idl):
        schema = composer.compose(idl)
        recomposed = composer.compose(composer.print_user_schema(schema))
        assert composer.print_user_schema(lexicographic_sort_schema(schema)) == (
            composer.print_user_schema(lexicographic_sort_schema(recomposed))
        )


class TestExtensionMode:
    """Tests for composing an extension on top of a base schema."""

    def test_adds_field_to_base_type(self, composer):
        schema = composer.compose("extend type User { email: String }", BASE_IDL)
        assert set(schema.get_type("User").fields) == {"id", "name", "email"}

    def test_adds_new_type_and_query_field(self, composer):
        ext = """
        type Pet { name: String }
        extend type Query { pets: [Pet] }
        """
        schema = composer.compose(ext, BASE_IDL)
        assert "pets" in schema.query_type.fields
        assert schema.get_type("Pet") is not None

    def test_extension_can_use_fake_directives(self, composer):
        schema = composer.compose("extend type User { email: String @fake(type: email) }", BASE_IDL)
        assert "email" in schema.get_type("User").fields

    def test_redefining_base_type_fails(self, composer):
        with pytest.raises(CompositionError):
            composer.compose("type User { id: Int }", BASE_IDL)

    def test_redefining_base_field_fails(self, composer):
        with pytest.raises(CompositionError):
            composer.compose("extend type User { name: Int }", BASE_IDL)

    def test_invalid_extension_syntax(self, composer):
        with pytest.raises(CompositionError):
            composer.compose("extend type User {", BASE_IDL)


class TestFakeDefinition:
    """Tests for the auxiliary fragment."""

    def test_load_fake_definition(self):
        text = load_fake_definition()
        assert "directive @fake" in text
        assert "directive @listLength" in text

    def test_custom_fragment(self):
        composer = SchemaComposer("directive @mock on FIELD_DEFINITION")
        schema = composer.compose("type Query { hello: String @mock }")
        assert schema.get_directive("mock") is not None
        assert schema.get_directive("fake") is None
