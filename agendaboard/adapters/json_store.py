"""
JSON file backed agenda store.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from ..domain.exceptions import AgendaError, StoreError
from .memory_store import InMemoryStore

logger = logging.getLogger(__name__)


class JsonFileStore(InMemoryStore):
    """
    In-memory store that is loaded from and written back to a JSON file.

    The whole document is rewritten after every mutation through a uniquely
    named temporary file and an atomic rename. A failed write leaves both the
    previous file and the previous in-memory contents in place.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug("Store file %s does not exist yet; starting empty", self.path)
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Invalid JSON in store file {self.path}: {exc}") from exc
        except OSError as exc:
            raise StoreError(f"Could not read store file {self.path}: {exc}") from exc

        if not isinstance(document, dict):
            raise StoreError(f"Store file {self.path} must contain a JSON object.")

        try:
            self.load_document(document)
        except AgendaError as exc:
            raise StoreError(f"Corrupt record in store file {self.path}: {exc}") from exc
        except (KeyError, TypeError) as exc:
            raise StoreError(f"Corrupt record in store file {self.path}: {exc!r}") from exc

    def _changed(self) -> None:
        self.save()

    def save(self) -> None:
        """Write the current contents to disk."""
        with self._lock:
            document = self.to_document()
            tmp_name = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self.path.parent,
                    prefix=f".{self.path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as f:
                    tmp_name = f.name
                    json.dump(document, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except OSError as exc:
                if tmp_name is not None and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise StoreError(f"Could not write store file {self.path}: {exc}") from exc
