"""Document store operations.

Records live in a Supabase (PostgREST) table, one row per sailboat model.
Unit-pair fields are jsonb columns holding ``{"primary": .., "secondary": ..}``.
"Unsetting" a field means writing NULL to its column.

InMemoryStore offers the same three operations over plain dicts, for dry
runs.
"""

from __future__ import annotations

import copy
import itertools
import logging

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from sailcrawl.config import (
    SAILBOAT_TABLE,
    SUPABASE_SCHEMA,
    SUPABASE_SECRET_KEY,
    SUPABASE_URL,
)
from sailcrawl.errors import PersistenceError
from sailcrawl.measurements import collapse_whitespace

logger = logging.getLogger(__name__)

MODEL_COLUMN = "model"
ID_COLUMN = "id"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the model name is matched literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def model_pattern(model: str) -> str:
    """ilike pattern for *model*; any whitespace run matches any gap."""
    words = [_escape_like(word) for word in model.split()]
    return f"%{'%'.join(words)}%"


def model_matches(stored_model: str | None, model: str) -> bool:
    """Case- and whitespace-insensitive substring match of *model* in *stored_model*."""
    if stored_model is None:
        return False
    return collapse_whitespace(model).lower() in collapse_whitespace(stored_model).lower()


class SupabaseStore:
    """The sailboats table."""

    def __init__(
        self,
        client: Client | None = None,
        table: str = SAILBOAT_TABLE,
        schema: str = SUPABASE_SCHEMA,
    ):
        self._client = client
        self.table_name = table
        self.schema = schema

    def _table(self):
        if self._client is None:
            if not SUPABASE_URL or not SUPABASE_SECRET_KEY:
                raise PersistenceError("SUPABASE_URL / SUPABASE_SECRET_KEY are not set")
            self._client = create_client(SUPABASE_URL, SUPABASE_SECRET_KEY)
        return self._client.schema(self.schema).table(self.table_name)

    def find_one(self, model: str) -> dict | None:
        """Return the first row whose model contains *model* (case-insensitive)."""
        pattern = model_pattern(model)
        try:
            resp = (
                self._table()
                .select("*")
                .ilike(MODEL_COLUMN, pattern)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            raise PersistenceError(f"find_one failed: model={model!r}, error={e}") from e

        if not resp.data:
            return None
        return resp.data[0]

    def insert(self, document: dict) -> dict:
        try:
            resp = self._table().insert(document).execute()
        except (APIError, httpx.HTTPError) as e:
            raise PersistenceError(
                f"insert failed: model={document.get(MODEL_COLUMN)!r}, error={e}"
            ) from e

        logger.debug("%s: inserted %s", self.table_name, document.get(MODEL_COLUMN))
        return resp.data[0] if resp.data else document

    def update_fields(self, record_id, set_map: dict, unset_keys: list[str]) -> None:
        """Set changed fields and clear removed ones in a single update."""
        payload = dict(set_map)
        for key in unset_keys:
            payload[key] = None
        if not payload:
            return

        try:
            self._table().update(payload).eq(ID_COLUMN, record_id).execute()
        except (APIError, httpx.HTTPError) as e:
            raise PersistenceError(f"update failed: id={record_id}, error={e}") from e

        logger.debug(
            "%s: updated id=%s (set=%d, unset=%d)",
            self.table_name, record_id, len(set_map), len(unset_keys),
        )


class InMemoryStore:
    """Process-local stand-in for SupabaseStore."""

    def __init__(self):
        self.documents: list[dict] = []
        self.writes = 0
        self._ids = itertools.count(1)

    def find_one(self, model: str) -> dict | None:
        for doc in self.documents:
            if model_matches(doc.get(MODEL_COLUMN), model):
                return copy.deepcopy(doc)
        return None

    def insert(self, document: dict) -> dict:
        doc = copy.deepcopy(document)
        doc[ID_COLUMN] = next(self._ids)
        self.documents.append(doc)
        self.writes += 1
        return copy.deepcopy(doc)

    def update_fields(self, record_id, set_map: dict, unset_keys: list[str]) -> None:
        for doc in self.documents:
            if doc.get(ID_COLUMN) == record_id:
                doc.update(copy.deepcopy(set_map))
                for key in unset_keys:
                    doc.pop(key, None)
                self.writes += 1
                return
        raise PersistenceError(f"update failed: no document with id={record_id}")
