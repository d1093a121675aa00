"""Schema composition from IDL text using graphql-core.

Every composed schema is the user's IDL merged with the auxiliary fake
definition fragment (the ``@fake``, ``@examples`` and ``@listLength``
directives plus their helper types). In extension mode the user's IDL is
applied as an extension on top of a read-only base schema.

The same ``SchemaComposer`` is used by the editor session and by the server,
so an IDL document that composes in one place composes in the other.
"""

from importlib import resources

from graphql import (
    DocumentNode,
    GraphQLError,
    GraphQLSchema,
    Source,
    build_ast_schema,
    concat_ast,
    extend_schema,
    parse,
    print_ast,
    print_schema,
    validate_schema,
)

from .errors import CompositionError

FAKE_DEFINITION_FILE = "fake_definition.graphql"


def load_fake_definition() -> str:
    """Read the auxiliary fragment shipped with the package."""
    return resources.files("gql_faker").joinpath(FAKE_DEFINITION_FILE).read_text(encoding="utf-8")


def _definition_name(definition) -> str | None:
    name = getattr(definition, "name", None)
    return name.value if name is not None else None


class SchemaComposer:
    """Builds executable schemas from IDL text.

    Args:
        fake_definition: The auxiliary IDL fragment merged into every schema.
            Defaults to the fragment shipped with the package.
    """

    def __init__(self, fake_definition: str | None = None):
        if fake_definition is None:
            fake_definition = load_fake_definition()
        self.fake_definition = fake_definition
        self._fake_ast = parse(Source(fake_definition, FAKE_DEFINITION_FILE))
        self._fake_names = {
            name for name in map(_definition_name, self._fake_ast.definitions) if name
        }

    def compose(
        self,
        primary_idl: str,
        base_idl: str | None = None,
        source_name: str | None = None,
    ) -> GraphQLSchema:
        """Compose an executable schema.

        Args:
            primary_idl: The user-owned IDL document
            base_idl: Read-only base schema IDL; when given, ``primary_idl`` is
                applied to it as an extension document
            source_name: Name used for the primary document in error locations

        Returns:
            The composed schema

        Raises:
            CompositionError: On syntax or type-system errors
        """
        try:
            if base_idl:
                schema = self._build(parse(base_idl))
                schema = extend_schema(schema, self._parse(primary_idl, source_name))
            else:
                schema = self._build(self._parse(primary_idl, source_name))
            errors = validate_schema(schema)
        except (GraphQLError, TypeError) as e:
            raise CompositionError(str(e)) from e

        if errors:
            raise CompositionError("\n\n".join(error.message for error in errors))
        return schema

    def try_compose(self, primary_idl: str, base_idl: str | None = None) -> GraphQLSchema | None:
        """Compose, returning None instead of raising on failure."""
        try:
            return self.compose(primary_idl, base_idl)
        except CompositionError:
            return None

    def print_user_schema(self, schema: GraphQLSchema) -> str:
        """Print a composed schema without the auxiliary fragment definitions.

        The result composes back into an equivalent schema.
        """
        document = parse(print_schema(schema))
        definitions = tuple(
            d for d in document.definitions if _definition_name(d) not in self._fake_names
        )
        return print_ast(DocumentNode(definitions=definitions))

    def _parse(self, idl: str, source_name: str | None) -> DocumentNode:
        if source_name:
            return parse(Source(idl, source_name))
        return parse(idl)

    def _build(self, document: DocumentNode) -> GraphQLSchema:
        return build_ast_schema(concat_ast([document, self._fake_ast]))
