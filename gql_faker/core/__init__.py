"""Core modules for schema composition, storage and live editing."""

from .composer import SchemaComposer, load_fake_definition
from .config import ServerConfig, parse_boolean, parse_header
from .editor import (
    EditorSession,
    EditorState,
    Edited,
    Loaded,
    SaveFailed,
    SaveRequested,
    SaveSucceeded,
    StatusCleared,
    View,
    ViewSwitched,
    transition,
)
from .errors import (
    CompositionError,
    EditDisabledError,
    GQLFakerError,
    InvalidSchemaNameError,
    SchemaNotFoundError,
    StorageError,
)
from .faker import FakeResolvers, FakeValueGenerator
from .models import GraphQLRequest, UserIDL
from .persistence import PersistenceService
from .resolution import ResolvedSchema, SchemaResolver
from .store import IDLStore

__all__ = [
    # Composer
    "SchemaComposer",
    "load_fake_definition",
    # Config
    "ServerConfig",
    "parse_boolean",
    "parse_header",
    # Editor
    "EditorSession",
    "EditorState",
    "Edited",
    "Loaded",
    "SaveFailed",
    "SaveRequested",
    "SaveSucceeded",
    "StatusCleared",
    "View",
    "ViewSwitched",
    "transition",
    # Errors
    "CompositionError",
    "EditDisabledError",
    "GQLFakerError",
    "InvalidSchemaNameError",
    "SchemaNotFoundError",
    "StorageError",
    # Fake data
    "FakeResolvers",
    "FakeValueGenerator",
    # Models
    "GraphQLRequest",
    "UserIDL",
    # Storage
    "IDLStore",
    "PersistenceService",
    # Resolution
    "ResolvedSchema",
    "SchemaResolver",
]
