"""
Record Store

Flat key-value storage for the three collections (students, teachers, results).
Every collection is a JSON array that is read as a snapshot and written back
as a whole - there are no partial updates.
"""
import copy
import logging
import time
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from models.records import RecordCollection

logger = logging.getLogger(__name__)

STUDENTS = "students"
TEACHERS = "teachers"
RESULTS = "results"

COLLECTIONS = (STUDENTS, TEACHERS, RESULTS)


class RecordStore:
    """Interface: ``read`` returns a fresh copy, ``write`` replaces the collection."""

    def read(self, collection: str) -> List[dict]:
        raise NotImplementedError

    def write(self, collection: str, records: List[dict]) -> None:
        raise NotImplementedError


class InMemoryRecordStore(RecordStore):
    def __init__(self, initial: Dict[str, List[dict]] = None):
        self._data: Dict[str, List[dict]] = {}
        for name, records in (initial or {}).items():
            self.write(name, records)

    def read(self, collection: str) -> List[dict]:
        return copy.deepcopy(self._data.get(collection, []))

    def write(self, collection: str, records: List[dict]) -> None:
        self._data[collection] = copy.deepcopy(list(records))


class SqlRecordStore(RecordStore):
    """One ``record_collections`` row per collection, payload stored as JSON."""

    def __init__(self, db: Session):
        self.db = db

    def read(self, collection: str) -> List[dict]:
        row = self.db.query(RecordCollection).filter(RecordCollection.name == collection).first()
        if row is None or not row.payload:
            return []
        return copy.deepcopy(list(row.payload))

    def write(self, collection: str, records: List[dict]) -> None:
        payload = copy.deepcopy(list(records))
        row = self.db.query(RecordCollection).filter(RecordCollection.name == collection).first()
        if row is None:
            row = RecordCollection(name=collection, payload=payload)
            self.db.add(row)
        else:
            row.payload = payload

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to write collection %s", collection)
            raise


def new_record_id(prefix: str, existing_ids: Iterable[str]) -> str:
    """Return ``<prefix>_<ms timestamp>``, bumping the timestamp while it is taken."""
    taken = set(existing_ids)
    stamp = int(time.time() * 1000)
    record_id = f"{prefix}_{stamp}"
    while record_id in taken:
        stamp += 1
        record_id = f"{prefix}_{stamp}"
    return record_id
