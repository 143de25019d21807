"""
Record Store Service

Deduplicating upserts into the shared relational store. Each record is
written with INSERT ... ON CONFLICT (natural key) DO UPDATE, so a second
ingest of the same key overwrites the row instead of duplicating it.
"""
from typing import Any, Dict, Optional

from sqlalchemy import func, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.core.db import get_engine, init_db, make_session_factory
from app.core.exceptions import StoreConnectionError, StoreError, StoreWriteError
from app.core.logging import get_logger
from app.models.records import TABLES
from app.schemas.records import NormalizedRecord, RecordKind
from app.schemas.ingestion import RecordOutcome, SkipReason, Skipped, Stored

logger = get_logger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class RecordStore:
    """Upsert and lookup access to the clinical_trials, publications and experts tables."""

    def __init__(self, engine: Optional[Engine] = None, database_url: Optional[str] = None):
        self._engine = engine or get_engine(database_url)
        self._session_factory = make_session_factory(self._engine)
        self._schema_ready = False

        dialect = self._engine.dialect.name
        if dialect not in _INSERT_BY_DIALECT:
            raise StoreError(f"Unsupported store dialect: {dialect}")
        self._insert = _INSERT_BY_DIALECT[dialect]

    @property
    def url(self) -> str:
        return self._engine.url.render_as_string(hide_password=True)

    def check_connection(self) -> None:
        """
        Verify the store is reachable and the tables exist.

        Raises:
            StoreConnectionError: if the database cannot be reached
        """
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            if not self._schema_ready:
                init_db(self._engine)
                self._schema_ready = True
        except SQLAlchemyError as e:
            raise StoreConnectionError(self.url, str(e)) from e

    @property
    def is_connected(self) -> bool:
        try:
            self.check_connection()
            return True
        except StoreConnectionError:
            return False

    def upsert(self, record: NormalizedRecord) -> RecordOutcome:
        """
        Insert the record, or overwrite the row sharing its natural key.

        Every non-key column takes the new value (last write wins) and
        updated_at is bumped; id and created_at keep their original values.
        A store-side error is logged and reported as Skipped so sibling
        records are unaffected.
        """
        table = TABLES[record.kind].__table__
        values = record.to_row()

        stmt = self._insert(table).values(**values)
        update_columns = {
            column: stmt.excluded[column]
            for column in values
            if column not in record.natural_key
        }
        update_columns["updated_at"] = func.now()
        stmt = stmt.on_conflict_do_update(
            index_elements=list(record.natural_key),
            set_=update_columns,
        ).returning(*table.c)

        try:
            with self._session_factory() as session:
                row = session.execute(stmt).mappings().one()
                session.commit()
        except SQLAlchemyError as e:
            error = StoreWriteError(table.name, record.describe(), str(e))
            logger.warning(f"Skipping record: {error}")
            return Skipped(key=record.describe(), reason=SkipReason.STORAGE_FAILED, detail=str(error))

        logger.debug(f"Upserted {table.name}: {record.describe()}")
        return Stored(
            key=record.describe(),
            row=dict(row),
            enriched=bool(values.get("ai_summary")),
        )

    def _get(self, kind: RecordKind, **key: Any) -> Optional[Dict[str, Any]]:
        table = TABLES[kind].__table__
        stmt = select(table)
        for column, value in key.items():
            stmt = stmt.where(table.c[column] == value)

        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return dict(row) if row else None

    def get_trial(self, nct_id: str) -> Optional[Dict[str, Any]]:
        return self._get(RecordKind.CLINICAL_TRIAL, nct_id=nct_id)

    def get_publication(self, title: str) -> Optional[Dict[str, Any]]:
        return self._get(RecordKind.PUBLICATION, title=title)

    def get_researcher(self, name: str, affiliation: str = "") -> Optional[Dict[str, Any]]:
        return self._get(RecordKind.RESEARCHER, name=name, affiliation=affiliation)

    def count(self, kind: RecordKind) -> int:
        """Number of stored rows of one kind."""
        table = TABLES[kind].__table__
        with self._engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(table)).scalar_one()
