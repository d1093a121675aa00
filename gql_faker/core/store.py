"""Flat file storage for IDL documents, one file per schema name."""

import logging
import re
from pathlib import Path

from .errors import InvalidSchemaNameError, SchemaNotFoundError, StorageError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_FILE = "default.graphql"
SCHEMA_FILE_SUFFIX = ".graphql"

# Names become a single path segment: no separators, no leading dot.
_SCHEMA_NAME_RE = re.compile(r"^[A-Za-z0-9_\-][A-Za-z0-9_.\-]*$")


class IDLStore:
    """Reads and writes IDL documents under ``schema_dir``.

    An empty or missing name maps to ``default.graphql``; any other name maps
    to ``<name>.graphql``. Writes replace the whole file.
    """

    def __init__(self, schema_dir: str | Path):
        self.schema_dir = Path(schema_dir)

    def path_for(self, name: str | None) -> Path:
        """Return the file backing a schema name."""
        if not name:
            return self.schema_dir / DEFAULT_SCHEMA_FILE
        if not _SCHEMA_NAME_RE.match(name):
            raise InvalidSchemaNameError(f'Invalid schema name "{name}"')
        return self.schema_dir / f"{name}{SCHEMA_FILE_SUFFIX}"

    def exists(self, name: str | None) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str | None) -> str:
        """Return the stored IDL text.

        Raises:
            SchemaNotFoundError: If nothing is stored under ``name``
            StorageError: If the file exists but cannot be read
        """
        path = self.path_for(name)
        if not path.is_file():
            raise SchemaNotFoundError(name)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(str(e)) from e

    def write(self, name: str | None, text: str) -> Path:
        """Replace the IDL stored under ``name``.

        Raises:
            StorageError: If the file cannot be written
        """
        path = self.path_for(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StorageError(str(e)) from e
        return path

    def seed_default(self, text: str) -> bool:
        """Write the default document if the default slot is empty.

        Returns:
            True if the default document was written
        """
        if self.exists(None):
            return False
        path = self.write(None, text)
        logger.info("Seeded default schema at %s", path)
        return True
