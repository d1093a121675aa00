"""Write-through persistence of IDL documents, gated by edit mode."""

import logging
from datetime import datetime
from pathlib import Path

from .errors import EditDisabledError
from .store import IDLStore

logger = logging.getLogger(__name__)


class PersistenceService:
    """Accepts full-text IDL replacements for a schema slot.

    No composition check happens here; the editor validates before it saves.
    """

    def __init__(self, store: IDLStore, edit_mode: bool = True):
        self.store = store
        self.edit_mode = edit_mode

    def save(self, name: str | None, text: str) -> Path:
        """Store ``text`` under ``name``.

        Raises:
            EditDisabledError: If edit mode is off (storage is not touched)
            StorageError: If the write fails
        """
        if not self.edit_mode:
            raise EditDisabledError()
        path = self.store.write(name, text)
        logger.info("Schema saved to %s on %s", path, datetime.now().strftime("%c"))
        return path
