"""Diff-based upsert of VesselRecords.

One stored row per model. A re-crawled model is compared field by field
with what is stored: changed fields are set, fields that vanished from the
source page are unset, and nothing is written when both agree.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import threading
import weakref
from dataclasses import dataclass, field
from typing import Protocol

from sailcrawl.db import ID_COLUMN
from sailcrawl.errors import PersistenceError
from sailcrawl.measurements import collapse_whitespace
from sailcrawl.models import UNIT_LABELS, VesselRecord
from sailcrawl.normalizer import to_document

logger = logging.getLogger(__name__)

PAIR_KEYS = ("primary", "secondary")


class DocumentStore(Protocol):
    def find_one(self, model: str) -> dict | None: ...

    def insert(self, document: dict) -> dict: ...

    def update_fields(self, record_id, set_map: dict, unset_keys: list[str]) -> None: ...


class UpsertOutcome(enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass
class RecordDiff:
    """Changes needed to turn a stored row into the new record."""

    set_fields: dict = field(default_factory=dict)
    unset_keys: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.set_fields and not self.unset_keys


def _is_absent(value) -> bool:
    return value is None or value == "" or value == {}


def _pair_equal(stored, new: dict) -> bool:
    if not isinstance(stored, dict):
        return False
    return all(stored.get(key) == new.get(key) for key in PAIR_KEYS)


def diff_record(stored: dict, record: VesselRecord) -> RecordDiff:
    """Compare *record* with the *stored* row over the VesselRecord fields.

    Columns outside the record schema (``id``, timestamps) are ignored.
    """
    new_doc = to_document(record)
    diff = RecordDiff()

    for name in VesselRecord.field_names():
        new_value = new_doc.get(name)
        stored_value = stored.get(name)

        if new_value is None:
            if not _is_absent(stored_value):
                diff.unset_keys.append(name)
            continue

        if name in UNIT_LABELS:
            equal = _pair_equal(stored_value, new_value)
        else:
            equal = stored_value == new_value
        if not equal:
            diff.set_fields[name] = new_value

    return diff


def _model_key(model: str) -> str:
    return collapse_whitespace(model).lower()


class Persister:
    """Upserts records into a DocumentStore.

    The find-then-write sequence for one model runs under a per-model lock,
    so concurrent upserts of the same model cannot both insert. A lock lives
    only as long as some upsert holds it.
    """

    def __init__(self, store: DocumentStore):
        self.store = store
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    def _lock_for(self, model: str) -> threading.Lock:
        key = _model_key(model)
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def upsert(self, record: VesselRecord) -> UpsertOutcome:
        """Insert *record*, or update the stored row of the same model.

        Raises:
            PersistenceError: the record has no model name, or the store
                failed.
        """
        model = collapse_whitespace(record.model)
        if not model:
            raise PersistenceError(f"record has no model name: url={record.url}")
        if model != record.model:
            record = dataclasses.replace(record, model=model)

        with self._lock_for(model):
            stored = self.store.find_one(model)
            if stored is None:
                self.store.insert(to_document(record))
                logger.info("Created: %s", model)
                return UpsertOutcome.CREATED

            diff = diff_record(stored, record)
            if diff.is_empty:
                logger.info("Unchanged: %s", model)
                return UpsertOutcome.UNCHANGED

            self.store.update_fields(stored[ID_COLUMN], diff.set_fields, diff.unset_keys)
            logger.info(
                "Updated: %s (set=%s, unset=%s)",
                model, sorted(diff.set_fields), diff.unset_keys,
            )
            return UpsertOutcome.UPDATED
