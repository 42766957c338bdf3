"""
Row store for the barangay registry.

Exposes named collections (residents, households, officials, ordinances,
activities, reports, settings, users, sessions) with insert, update,
select-with-ordering and upsert-with-conflict-key. Rows go in and come out
as plain dicts; record types are built from them by the callers.

Works against PostgreSQL or SQLite through SQLAlchemy Core.
"""

import os
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    delete,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.pool import StaticPool

from .errors import (
    DuplicateKeyError,
    GatewayReadError,
    GatewayWriteError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# PostgreSQL unique_violation
UNIQUE_VIOLATION = '23505'


def _is_unique_violation(error: IntegrityError) -> bool:
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    code = getattr(error.orig, 'pgcode', None) or getattr(error.orig, 'sqlstate', None)
    if code == UNIQUE_VIOLATION:
        return True
    return 'UNIQUE constraint failed' in str(error.orig)


# ============================================================================
# Schema
# ============================================================================

metadata = MetaData()


def _owned_table(name: str, *columns: Column) -> Table:
    """Table with the id, owner and creation columns every collection carries"""
    return Table(
        name,
        metadata,
        Column('id', String(36), primary_key=True, default=_new_id),
        *columns,
        Column('user_id', String(36), nullable=True, index=True),
        Column('created_at', DateTime(timezone=True), default=_utcnow),
    )


residents = _owned_table(
    'residents',
    Column('first_name', String(128), nullable=False),
    Column('last_name', String(128), nullable=False),
    Column('middle_name', String(128)),
    Column('age', Integer, nullable=False),
    Column('gender', String(16), nullable=False),
    Column('civil_status', String(16), nullable=False),
    Column('address', Text, nullable=False),
    Column('house_number', String(64), index=True),
    Column('contact', String(64)),
    Column('occupation', String(128)),
    Column('status', JSON, default=lambda: []),
)

households = _owned_table(
    'households',
    Column('house_number', String(64), nullable=False, unique=True),
    Column('address', Text),
    Column('utilities', JSON, default=lambda: {'electricity': False, 'water': False, 'internet': False}),
    Column('monthly_income', Float),
)

officials = _owned_table(
    'officials',
    Column('name', String(256), nullable=False),
    Column('position', String(128), nullable=False),
    Column('term', String(32)),
    Column('contact', String(64)),
    Column('email', String(256)),
    Column('photo', Text),
    Column('status', String(16), nullable=False, default='active'),
    Column('duty_status', String(16), nullable=False, default='off_duty'),
    Column('time_in', DateTime(timezone=True)),
    Column('time_out', DateTime(timezone=True)),
)

ordinances = _owned_table(
    'ordinances',
    Column('number', String(64), nullable=False, unique=True),
    Column('title', String(256), nullable=False),
    Column('category', String(64), nullable=False),
    Column('date_enacted', Date),
    Column('description', Text),
    Column('status', String(16), nullable=False, default='active'),
)

activities = _owned_table(
    'activities',
    Column('title', String(256), nullable=False),
    Column('type', String(64), nullable=False),
    Column('description', Text),
    Column('date', Date),
    Column('time', String(16)),
    Column('location', String(256)),
    Column('budget', Float, default=0),
    Column('attendees', Integer, default=0),
    Column('max_attendees', Integer),
    Column('status', String(16), nullable=False, default='upcoming'),
    Column('organizer', String(256)),
)

reports = _owned_table(
    'reports',
    Column('ticket_number', String(32), nullable=False, unique=True),
    Column('title', String(256), nullable=False),
    Column('category', String(64), nullable=False),
    Column('description', Text, nullable=False),
    Column('reported_by', String(256), nullable=False),
    Column('date_submitted', Date),
    Column('status', String(16), nullable=False, default='pending'),
    Column('priority', String(16), nullable=False, default='medium'),
    Column('assigned_to', String(256)),
    Column('resolution', Text),
)

settings = Table(
    'settings',
    metadata,
    Column('id', String(36), primary_key=True, default=_new_id),
    Column('user_id', String(36), nullable=False, unique=True),
    Column('barangay_info', JSON),
    Column('notifications', JSON),
    Column('system', JSON),
    Column('updated_at', DateTime(timezone=True), default=_utcnow, onupdate=_utcnow),
)

users = Table(
    'users',
    metadata,
    Column('id', String(36), primary_key=True, default=_new_id),
    Column('email', String(256), nullable=False, unique=True),
    Column('password_hash', String(256), nullable=False),
    Column('display_name', String(256)),
    Column('is_active', Boolean, nullable=False, default=True),
    Column('created_at', DateTime(timezone=True), default=_utcnow),
)

# Session id is the SHA-256 of the bearer token
sessions = Table(
    'sessions',
    metadata,
    Column('id', String(64), primary_key=True),
    Column('user_id', String(36), nullable=False, index=True),
    Column('created_at', DateTime(timezone=True), default=_utcnow),
    Column('expires_at', DateTime(timezone=True), nullable=False),
)


def non_nullable_columns(collection: str) -> List[str]:
    """Columns of ``collection`` that reject NULL, primary key excluded"""
    table = metadata.tables[collection]
    return [c.name for c in table.columns if not c.nullable and not c.primary_key]


# ============================================================================
# Row store
# ============================================================================

class RowStore:
    """
    Row-level access to the registry collections.

    Read failures raise GatewayReadError, write failures raise
    GatewayWriteError (DuplicateKeyError for unique-key violations). Every
    call runs in its own transaction; concurrent writers to the same row
    resolve as last write wins.
    """

    COLLECTIONS = [
        'residents',
        'households',
        'officials',
        'ordinances',
        'activities',
        'reports',
        'settings',
        'users',
        'sessions',
    ]

    def __init__(self, connection_string: Optional[str] = None, create_schema: bool = True):
        """
        Initialize database connection.

        Args:
            connection_string: SQLAlchemy database URL.
                              If None, uses DATABASE_URL environment variable.
            create_schema: Create missing tables on startup
        """
        if connection_string is None:
            connection_string = os.getenv('DATABASE_URL')
            if not connection_string:
                raise ValueError(
                    "No database connection string provided. "
                    "Set DATABASE_URL environment variable or pass connection_string."
                )

        self.connection_string = connection_string
        self.engine = self._create_engine(connection_string)
        self._verify_connection()
        if create_schema:
            metadata.create_all(self.engine)
        logger.info("Database connection established")

    @staticmethod
    def _create_engine(connection_string: str) -> Engine:
        url = make_url(connection_string)
        if url.get_backend_name() != 'sqlite':
            return create_engine(connection_string, pool_pre_ping=True)

        # Request handlers run in a threadpool; an in-memory database must
        # also stay on one connection or every checkout sees an empty schema
        kwargs: Dict[str, Any] = {'connect_args': {'check_same_thread': False}}
        if url.database in (None, '', ':memory:'):
            kwargs['poolclass'] = StaticPool
        return create_engine(connection_string, **kwargs)

    def _verify_connection(self):
        """Verify database connection works"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            raise RuntimeError(f"Failed to connect to database: {e}")

    def ping(self) -> bool:
        try:
            self._verify_connection()
            return True
        except RuntimeError:
            return False

    def _table(self, collection: str) -> Table:
        if collection not in self.COLLECTIONS:
            raise ValueError(f"Unknown collection '{collection}'. Available: {self.COLLECTIONS}")
        return metadata.tables[collection]

    @staticmethod
    def _columns_only(table: Table, row: Dict[str, Any]) -> Dict[str, Any]:
        """Drop keys that are not columns of ``table``"""
        return {k: v for k, v in row.items() if k in table.c}

    # =========================================================================
    # Reads
    # =========================================================================

    def select(
        self,
        collection: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        where: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        Select rows from a collection.

        Args:
            collection: Collection name
            order_by: Column to sort by (nulls sort last)
            descending: Sort descending instead of ascending
            where: Column equality filters

        Returns:
            List of row dicts
        """
        table = self._table(collection)
        stmt = select(table)
        for column, value in (where or {}).items():
            stmt = stmt.where(table.c[column] == value)
        if order_by:
            column = table.c[order_by]
            ordering = column.desc() if descending else column.asc()
            stmt = stmt.order_by(ordering.nulls_last())

        try:
            with self.engine.connect() as conn:
                rows = [dict(r._mapping) for r in conn.execute(stmt)]
        except SQLAlchemyError as e:
            logger.error(f"Select from {collection} failed: {e}")
            raise GatewayReadError(f"Failed to load {collection}") from e

        logger.debug(f"Selected {len(rows)} rows from {collection}")
        return rows

    def get(self, collection: str, row_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one row by id, or None"""
        rows = self.select(collection, where={'id': row_id})
        return rows[0] if rows else None

    def count(self, collection: str, where: Optional[Dict[str, Any]] = None) -> int:
        return len(self.select(collection, where=where))

    # =========================================================================
    # Writes
    # =========================================================================

    def _write(self, collection: str, stmt) -> Any:
        try:
            with self.engine.begin() as conn:
                return conn.execute(stmt)
        except IntegrityError as e:
            logger.error(f"Integrity violation on {collection}: {e.orig}")
            if _is_unique_violation(e):
                raise DuplicateKeyError(
                    f"Duplicate key in {collection}", collection=collection
                ) from e
            raise GatewayWriteError(f"Failed to write to {collection}") from e
        except SQLAlchemyError as e:
            logger.error(f"Write to {collection} failed: {e}")
            raise GatewayWriteError(f"Failed to write to {collection}") from e

    def insert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a row.

        Returns:
            The stored row, including generated id and created_at
        """
        table = self._table(collection)
        values = self._columns_only(table, row)
        values.setdefault('id', _new_id())

        self._write(collection, insert(table).values(**values))
        logger.info(f"Inserted row {values['id']} into {collection}")
        return self.get(collection, values['id'])

    def update(self, collection: str, patch: Dict[str, Any], match_id: str) -> Dict[str, Any]:
        """
        Update the row whose id is ``match_id``.

        Raises:
            RecordNotFoundError: if no row has that id
        """
        table = self._table(collection)
        values = self._columns_only(table, patch)
        values.pop('id', None)

        if values:
            result = self._write(
                collection, update(table).where(table.c.id == match_id).values(**values)
            )
            if result.rowcount == 0:
                raise RecordNotFoundError(f"No {collection} row with id {match_id}")
            logger.info(f"Updated row {match_id} in {collection}")

        row = self.get(collection, match_id)
        if row is None:
            raise RecordNotFoundError(f"No {collection} row with id {match_id}")
        return row

    def upsert(
        self,
        collection: str,
        row: Dict[str, Any],
        conflict_keys: Sequence[str]
    ) -> Dict[str, Any]:
        """
        Insert a row, or update the existing row with the same conflict keys.

        Args:
            collection: Collection name
            row: Row values; must include every conflict key
            conflict_keys: Columns covered by a unique constraint

        Returns:
            The stored row
        """
        table = self._table(collection)
        values = self._columns_only(table, row)
        missing = [k for k in conflict_keys if values.get(k) is None]
        if missing:
            raise ValueError(f"Upsert on {collection} needs values for {missing}")
        values.setdefault('id', _new_id())
        changes = {k: v for k, v in values.items() if k not in conflict_keys and k != 'id'}

        dialect = self.engine.dialect.name
        if dialect in ('sqlite', 'postgresql'):
            dialect_insert = sqlite.insert if dialect == 'sqlite' else postgresql.insert
            stmt = dialect_insert(table).values(**values)
            if changes:
                stmt = stmt.on_conflict_do_update(
                    index_elements=list(conflict_keys),
                    set_={k: stmt.excluded[k] for k in changes},
                )
            else:
                stmt = stmt.on_conflict_do_nothing(index_elements=list(conflict_keys))
            self._write(collection, stmt)
        else:
            where = {k: values[k] for k in conflict_keys}
            existing = self.select(collection, where=where)
            if existing:
                if changes:
                    self._write(
                        collection,
                        update(table).where(table.c.id == existing[0]['id']).values(**changes),
                    )
            else:
                self._write(collection, insert(table).values(**values))

        logger.info(f"Upserted row into {collection} on {list(conflict_keys)}")
        return self.select(collection, where={k: values[k] for k in conflict_keys})[0]

    def delete(self, collection: str, match_id: str) -> bool:
        """Delete one row by id; returns False if nothing matched"""
        table = self._table(collection)
        result = self._write(collection, delete(table).where(table.c.id == match_id))
        return result.rowcount > 0


# Global cached store instances
_store_cache: Dict[str, RowStore] = {}


def get_store(connection_string: Optional[str] = None) -> RowStore:
    """
    Get a cached RowStore instance.

    Args:
        connection_string: Database connection string

    Returns:
        Cached RowStore instance
    """
    cache_key = connection_string or os.getenv('DATABASE_URL', 'default')

    if cache_key not in _store_cache:
        _store_cache[cache_key] = RowStore(connection_string)

    return _store_cache[cache_key]
