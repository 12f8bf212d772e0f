import json
import logging
import os
import tempfile
import threading
from typing import Callable, Dict, List, Optional

from fastapi import Request
from pydantic import ValidationError

from app.exceptions import ConflictError, NotFoundError, PersistenceWarning
from app.models import StringRecord

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# STRING STORE
# ------------------------------------------------------------------------------
class StringStore:
    """
    In-memory collection of analyzed strings keyed by SHA-256 id, mirrored
    to a single JSON file.

    Every mutation rewrites the whole file before returning. A single lock
    covers the in-memory change and the write, and reads take the same lock
    so they never observe a half-applied mutation.
    """

    def __init__(self, data_file: str):
        self.data_file = data_file
        self._records: Dict[str, StringRecord] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, record_id: str) -> bool:
        with self._lock:
            return record_id in self._records

    def insert(self, record: StringRecord) -> StringRecord:
        with self._lock:
            if record.id in self._records:
                raise ConflictError("String already exists in the system")
            self._records[record.id] = record
            try:
                self.persist()
            except BaseException:
                del self._records[record.id]
                raise
        logger.info(f"Stored string {record.id}")
        return record

    def get(self, record_id: str) -> StringRecord:
        with self._lock:
            record = self._records.get(record_id)
        if record is None:
            raise NotFoundError("String does not exist in the system")
        return record

    def delete(self, record_id: str) -> None:
        with self._lock:
            if record_id not in self._records:
                raise NotFoundError("String does not exist in the system")
            record = self._records.pop(record_id)
            try:
                self.persist()
            except BaseException:
                self._records[record_id] = record
                raise
        logger.info(f"Deleted string {record_id}")

    def list(self, predicate: Optional[Callable[[StringRecord], bool]] = None) -> List[StringRecord]:
        with self._lock:
            records = list(self._records.values())
        if predicate is None:
            return records
        return [r for r in records if predicate(r)]

    def all(self) -> List[StringRecord]:
        return self.list()

    # --------------------------------------------------------------------------
    # PERSISTENCE
    # --------------------------------------------------------------------------
    def load(self) -> int:
        """
        Replace the in-memory collection with the contents of the data file.

        Best effort: a missing or corrupt file leaves the store empty and is
        only logged. Entries that fail validation are skipped.
        """
        with self._lock:
            self._records = {}
            if not os.path.exists(self.data_file):
                logger.info(f"No data file at {self.data_file}, starting empty")
                return 0

            try:
                items = self._read_file()
            except PersistenceWarning as e:
                logger.warning(f"Could not load {self.data_file}: {e}. Starting with an empty store")
                return 0

            for item in items:
                try:
                    record = StringRecord.model_validate(item)
                except ValidationError as e:
                    logger.warning(f"Skipping invalid record in {self.data_file}: {e.error_count()} error(s)")
                    continue
                self._records[record.id] = record

            logger.info(f"Loaded {len(self._records)} strings from storage.")
            return len(self._records)

    def _read_file(self) -> List[dict]:
        try:
            with open(self.data_file, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceWarning(str(e)) from e

        if not isinstance(data, list):
            raise PersistenceWarning(f"expected a list of records, got {type(data).__name__}")
        return data

    def persist(self) -> None:
        """Write the full collection to the data file, replacing it atomically."""
        with self._lock:
            payload = [r.model_dump(mode="json") for r in self._records.values()]
            directory = os.path.dirname(os.path.abspath(self.data_file))
            os.makedirs(directory, exist_ok=True)

            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".strings-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(payload, fh, ensure_ascii=True, indent=2)
                os.replace(tmp_path, self.data_file)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise


# ------------------------------------------------------------------------------
# STORE DEPENDENCY
# ------------------------------------------------------------------------------
def get_store(request: Request) -> StringStore:
    """Dependency to provide the application's string store."""
    return request.app.state.store
