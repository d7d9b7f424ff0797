"""
Local JSON Record Store

DESIGN DECISION: The locally persisted store keeps two independently
keyed collections, one JSON file each:

    <data_dir>/dailyspend_categories.json
    <data_dir>/dailyspend_expenses.json

Each file holds a list of flat records with camelCase field names.
There is no schema version tag; the files are assumed to match the
current field set exactly.

TRADEOFFS:
- Whole-collection rewrite on every mutation (fine for personal use)
- No locking: exactly one writer is assumed
- Writes go to a temp file and are swapped in, so a crash mid-write
  leaves the previous collection intact
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, TypeVar

import structlog
from pydantic import BaseModel, ValidationError as PydanticValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from dailyspend.config import StorageSettings, get_settings
from dailyspend.errors import StorageError
from dailyspend.models.records import Category, Expense
from dailyspend.services.storage.collection import CollectionRecordStore


logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class JsonFileRecordStore(CollectionRecordStore):
    """
    Record store persisted as two JSON files.

    Every read goes back to disk, so external edits (or an import) are
    picked up by the next call.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        settings: Optional[StorageSettings] = None,
    ):
        self._settings = settings or get_settings().storage
        self._data_dir = Path(data_dir or self._settings.data_dir)
        self._categories_path = self._data_dir / f"{self._settings.categories_key}.json"
        self._expenses_path = self._data_dir / f"{self._settings.expenses_key}.json"

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def categories_path(self) -> Path:
        return self._categories_path

    @property
    def expenses_path(self) -> Path:
        return self._expenses_path

    # -------------------------------------------------------------------------
    # Backend hooks
    # -------------------------------------------------------------------------

    def _load_categories(self) -> list[Category]:
        return self._read_collection(self._categories_path, Category)

    def _save_categories(self, categories: list[Category]) -> None:
        self._write_collection(self._categories_path, categories)

    def _load_expenses(self) -> list[Expense]:
        return self._read_collection(self._expenses_path, Expense)

    def _save_expenses(self, expenses: list[Expense]) -> None:
        self._write_collection(self._expenses_path, expenses)

    # -------------------------------------------------------------------------
    # File I/O
    # -------------------------------------------------------------------------

    def _read_collection(self, path: Path, model: type[RecordT]) -> list[RecordT]:
        """Read one collection. A missing file is an empty collection."""
        if not path.exists():
            return []

        try:
            raw = self._read_text(path)
        except OSError as e:
            raise StorageError(f"Failed to read {path.name}: {e}")

        if not raw.strip():
            return []

        try:
            rows = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt collection {path.name}: {e}")

        if not isinstance(rows, list):
            raise StorageError(f"Collection {path.name} is not a list of records")

        try:
            return [model.model_validate(row) for row in rows]
        except PydanticValidationError as e:
            raise StorageError(f"Invalid record in {path.name}: {e}")

    def _write_collection(self, path: Path, records: list[Any]) -> None:
        payload = json.dumps(
            [record.model_dump(mode="json", by_alias=True) for record in records],
            indent=2,
            ensure_ascii=False,
        )
        try:
            self._write_text(path, payload)
        except OSError as e:
            logger.error("collection_write_failed", path=str(path), error=str(e))
            raise StorageError(f"Failed to write {path.name}: {e}")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_text(self, path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
