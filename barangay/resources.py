"""
Generic resource list for a registry collection.

Every console screen does the same thing: fetch a collection, filter it
locally, validate and submit a form, then refetch. ResourceList does that
once, driven by the collection metadata in ``registry.py``.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .database import RowStore, non_nullable_columns
from .errors import (
    DuplicateKeyError,
    GatewayReadError,
    GatewayWriteError,
    MissingFieldError,
    NotAuthenticatedError,
    RecordNotFoundError,
    RecordValidationError,
)
from .registry import get_metadata

logger = logging.getLogger(__name__)


class LoadState(Enum):
    """Lifecycle of a resource list"""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def _plain(value: Any) -> Any:
    """Unwrap enum members so rows hold plain values"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ResourceList:
    """
    Fetch, filter and write one collection.

    State moves IDLE -> LOADING -> READY or ERROR on each load. A failed
    load keeps the previous items so callers can keep showing them.
    Writes check required fields and the signed-in user before touching
    the store, stamp the owner id and default status, and refetch after a
    successful write.
    """

    def __init__(self, store: RowStore, collection: str):
        meta = get_metadata(collection)
        self.store = store
        self.collection = collection
        self.record_type = meta['record']
        self.label = meta['label']
        self.order_by = meta['order_by']
        self.descending = meta['descending']
        self.search_fields = meta['search_fields']
        self.filter_field = meta['filter_field']
        self.filter_mode = meta['filter_mode']
        self.required_fields = meta['required_fields']
        self.default_status = meta['default_status']
        self.conflict_keys = meta['conflict_keys']
        self.duplicate_message = meta['duplicate_message']
        self.not_null = non_nullable_columns(collection)

        self.state = LoadState.IDLE
        self.items: List[Any] = []
        self.error: Optional[str] = None

    # =========================================================================
    # Reads
    # =========================================================================

    def load(self) -> List[Any]:
        """
        Fetch the whole collection and build records.

        Raises:
            GatewayReadError: the store failed or returned a malformed row
        """
        self.state = LoadState.LOADING
        try:
            rows = self.store.select(
                self.collection, order_by=self.order_by, descending=self.descending
            )
            items = [self.record_type.from_row(row) for row in rows]
        except GatewayReadError as e:
            self._fail(e.message)
            raise
        except RecordValidationError as e:
            self._fail(e.message)
            raise GatewayReadError(f"Failed to load {self.collection}: {e.message}") from e

        self.items = items
        self.state = LoadState.READY
        self.error = None
        return items

    def _fail(self, message: str):
        self.state = LoadState.ERROR
        self.error = message
        logger.error(f"Loading {self.collection} failed: {message}")

    def get(self, row_id: str) -> Any:
        row = self.store.get(self.collection, row_id)
        if row is None:
            raise RecordNotFoundError(f"{self.label.capitalize()} not found")
        try:
            return self.record_type.from_row(row)
        except RecordValidationError as e:
            raise GatewayReadError(f"Failed to load {self.label}: {e.message}") from e

    def find(self, **where: Any) -> List[Any]:
        """Records whose columns equal the given values, without touching ``items``"""
        rows = self.store.select(
            self.collection, order_by=self.order_by, descending=self.descending, where=where
        )
        try:
            return [self.record_type.from_row(row) for row in rows]
        except RecordValidationError as e:
            raise GatewayReadError(f"Failed to load {self.collection}: {e.message}") from e

    def filtered(self, search: str = "", filter_value: Optional[str] = "all") -> List[Any]:
        """
        Items matching a search term and the collection's filter.

        Both comparisons are case-insensitive substring matches (the filter
        is an exact match in ``equals`` mode). An empty search or a filter
        of "all" matches everything.
        """
        term = (search or "").strip().lower()
        value = (filter_value or "").strip().lower()
        if value == "all":
            value = ""

        return [
            item for item in self.items
            if (not term or self._matches_search(item, term))
            and (not value or self._matches_filter(item, value))
        ]

    def _matches_search(self, item: Any, term: str) -> bool:
        for name in self.search_fields:
            field_value = getattr(item, name, None)
            if field_value is not None and term in str(field_value).lower():
                return True
        full_name = getattr(item, 'full_name', None)
        return callable(full_name) and term in full_name().lower()

    def _matches_filter(self, item: Any, value: str) -> bool:
        if not self.filter_field:
            return True
        field_value = getattr(item, self.filter_field, None)
        if self.filter_mode == 'tag':
            return any(value in str(tag).lower() for tag in field_value or [])
        if self.filter_mode == 'contains':
            return value in str(field_value or "").lower()
        return str(field_value or "").lower() == value

    # =========================================================================
    # Writes
    # =========================================================================

    def validate(self, form: Dict[str, Any], fields: Optional[Iterable[str]] = None):
        """
        Presence check for required fields.

        Raises:
            MissingFieldError: for the first required field that is None or blank
        """
        for name in (self.required_fields if fields is None else fields):
            if is_blank(form.get(name)):
                raise MissingFieldError(name)

    def _require_user(self, user_id: Optional[str], action: str):
        if not user_id:
            raise NotAuthenticatedError(f"You must be logged in to {action} {self.label}")

    def _prepare(self, form: Dict[str, Any]) -> Dict[str, Any]:
        row = {}
        for key, value in form.items():
            value = _plain(value)
            row[key] = value.strip() if isinstance(value, str) else value
        return row

    def create(self, form: Dict[str, Any], user_id: Optional[str]) -> Any:
        """
        Insert a new row from a submitted form.

        Returns:
            The stored record
        """
        row = self._prepare(form)
        self.validate(row)
        self._require_user(user_id, "add")

        # Unset optional fields fall back to the column defaults
        row = {key: value for key, value in row.items() if value is not None}
        row['user_id'] = user_id
        if self.default_status and is_blank(row.get('status')):
            row['status'] = self.default_status

        try:
            stored = self.store.insert(self.collection, row)
        except DuplicateKeyError as e:
            raise DuplicateKeyError(self.duplicate_message, self.collection, self.conflict_keys) from e
        except GatewayWriteError as e:
            raise GatewayWriteError(f"Failed to add {self.label}") from e

        logger.info(f"Added {self.label} {stored['id']} for user {user_id}")
        self._refetch()
        return self.record_type.from_row(stored)

    def update(self, row_id: str, patch: Dict[str, Any], user_id: Optional[str]) -> Any:
        """
        Apply a partial update to one row.

        Required fields may be left out of ``patch`` but not blanked, and
        columns that reject NULL may not be set to None.
        """
        row = self._prepare(patch)
        self.validate(row, [name for name in self.required_fields if name in row])
        self.validate(row, [name for name in self.not_null if name in row])
        self._require_user(user_id, "update")

        try:
            stored = self.store.update(self.collection, row, row_id)
        except RecordNotFoundError:
            raise RecordNotFoundError(f"{self.label.capitalize()} not found")
        except DuplicateKeyError as e:
            raise DuplicateKeyError(self.duplicate_message, self.collection, self.conflict_keys) from e
        except GatewayWriteError as e:
            raise GatewayWriteError(f"Failed to update {self.label}") from e

        logger.info(f"Updated {self.label} {row_id} for user {user_id}")
        self._refetch()
        return self.record_type.from_row(stored)

    def upsert(self, form: Dict[str, Any], user_id: Optional[str]) -> Any:
        """Insert or update on the collection's conflict keys"""
        if not self.conflict_keys:
            raise ValueError(f"Collection '{self.collection}' has no conflict keys")

        row = self._prepare(form)
        self.validate(row)
        self._require_user(user_id, "update")
        row['user_id'] = user_id

        try:
            stored = self.store.upsert(self.collection, row, self.conflict_keys)
        except DuplicateKeyError as e:
            raise DuplicateKeyError(self.duplicate_message, self.collection, self.conflict_keys) from e
        except GatewayWriteError as e:
            raise GatewayWriteError(f"Failed to update {self.label}") from e

        logger.info(f"Saved {self.label} on {list(self.conflict_keys)} for user {user_id}")
        self._refetch()
        return self.record_type.from_row(stored)

    def _refetch(self):
        # The write already succeeded; a failed reload only leaves the list in ERROR
        try:
            self.load()
        except GatewayReadError as e:
            logger.warning(f"Refetch of {self.collection} after write failed: {e.message}")
