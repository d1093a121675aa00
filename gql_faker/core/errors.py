"""Exceptions shared by the gql-faker core components."""


class GQLFakerError(Exception):
    """Base class for all gql-faker errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CompositionError(GQLFakerError):
    """IDL text could not be parsed or built into a valid schema."""


class SchemaNotFoundError(GQLFakerError):
    """No IDL document is stored under the requested schema name."""

    def __init__(self, name: str | None):
        self.name = name
        super().__init__(f'Schema "{name or ""}" not found...')


class InvalidSchemaNameError(GQLFakerError):
    """Schema name cannot be mapped to a storage location."""


class StorageError(GQLFakerError):
    """Reading or writing an IDL document failed."""


class EditDisabledError(GQLFakerError):
    """A write was attempted while edit mode is off."""

    def __init__(self):
        super().__init__("Schema not editable. ENABLE_EDIT_MODE is false")
