"""Participant persistence on a single SQL table."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Column,
    LargeBinary,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    func,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from festival_registration.models.participant import COLUMNS, Participant
from festival_registration.utils.exceptions import (
    DuplicateKeyError,
    ParticipantNotFoundError,
    StoreError,
)

logger = logging.getLogger(__name__)

metadata = MetaData()

participants_table = Table(
    "Participants",
    metadata,
    Column(COLUMNS["registration_id"], String(20), primary_key=True),
    Column(COLUMNS["name"], String(100), nullable=False),
    Column(COLUMNS["department"], String(100), nullable=False),
    Column(COLUMNS["dancing_partner"], String(100)),
    Column(COLUMNS["contact_number"], String(20), nullable=False),
    Column(COLUMNS["email_address"], String(100), nullable=False),
    Column(COLUMNS["id_image"], LargeBinary),
)

_key = participants_table.c[COLUMNS["registration_id"]]

NOT_OPEN_MESSAGE = "Participant store is not open"


class StoreStatus(Enum):
    """Outcome of a single store operation."""

    INSERTED = "inserted"
    FOUND = "found"
    UPDATED = "updated"
    DELETED = "deleted"
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"


@dataclass
class StoreResult:
    """Typed result of a store operation."""

    status: StoreStatus
    record: Optional[Participant] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status in (
            StoreStatus.INSERTED,
            StoreStatus.FOUND,
            StoreStatus.UPDATED,
            StoreStatus.DELETED,
        )

    def raise_for_status(self) -> None:
        """
        Raise the matching exception for a failed operation.

        Raises:
            DuplicateKeyError: On DUPLICATE_KEY
            ParticipantNotFoundError: On NOT_FOUND
            StoreError: On STORE_ERROR
        """
        if self.status is StoreStatus.DUPLICATE_KEY:
            raise DuplicateKeyError(self.message or "Registration ID already exists")
        if self.status is StoreStatus.NOT_FOUND:
            raise ParticipantNotFoundError(self.message or "Participant not found")
        if self.status is StoreStatus.STORE_ERROR:
            raise StoreError(self.message)


def _not_open_result() -> StoreResult:
    logger.error(NOT_OPEN_MESSAGE)
    return StoreResult(StoreStatus.STORE_ERROR, message=NOT_OPEN_MESSAGE)


class ParticipantStore:
    """
    Handle on the Participants table.

    Owns one long-lived engine, opened at startup and disposed at exit.
    Every operation is one statement in its own transaction; the pooled
    connection is released whether the statement succeeds or fails.

    Usage:
        with ParticipantStore("sqlite:///data/participants.db") as store:
            result = store.find_by_id("R001")
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._engine: Optional[Engine] = None

    def __enter__(self) -> "ParticipantStore":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        """
        Connect and create the Participants table if it doesn't exist.

        Raises:
            StoreError: If the database cannot be reached
        """
        if self._engine is not None:
            return

        try:
            engine = create_engine(self.database_url)
            with engine.connect():
                pass
            metadata.create_all(engine, checkfirst=True)
        except SQLAlchemyError as e:
            logger.error(f"Database connection failed: {e}")
            raise StoreError(f"Database connection failed! {e}") from e

        self._engine = engine
        logger.info("Participant store opened at %s", engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        """Dispose the engine and its pooled connections."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        logger.info("Participant store closed")

    def _require_engine(self) -> Engine:
        if self._engine is None:
            raise StoreError(NOT_OPEN_MESSAGE)
        return self._engine

    def _exists(self, registration_id: str) -> bool:
        with self._require_engine().connect() as conn:
            row = conn.execute(select(_key).where(_key == registration_id)).first()
        return row is not None

    def insert(self, record: Participant) -> StoreResult:
        """
        Persist a new participant.

        Returns:
            StoreResult with INSERTED, DUPLICATE_KEY or STORE_ERROR

        Behavior:
            - An integrity violation whose key is already stored is reported
              as DUPLICATE_KEY; the existing row is left untouched
        """
        if self._engine is None:
            return _not_open_result()
        engine = self._engine
        try:
            with engine.begin() as conn:
                conn.execute(insert(participants_table).values(**record.to_row()))
        except IntegrityError as e:
            try:
                duplicate = self._exists(record.registration_id)
            except SQLAlchemyError as lookup_error:
                logger.error(f"Key lookup failed after integrity error: {lookup_error}")
                duplicate = False

            if duplicate:
                logger.info("Duplicate registration ID rejected: %s", record.registration_id)
                return StoreResult(StoreStatus.DUPLICATE_KEY, message="Registration ID already exists")

            logger.error(f"Integrity error inserting {record.registration_id}: {e}")
            return StoreResult(StoreStatus.STORE_ERROR, message=str(e.orig))
        except SQLAlchemyError as e:
            logger.error(f"Insert failed for {record.registration_id}: {e}")
            return StoreResult(StoreStatus.STORE_ERROR, message=str(e))

        logger.info("Participant inserted: %s", record.registration_id)
        return StoreResult(StoreStatus.INSERTED, record=record)

    def find_by_id(self, registration_id: str) -> StoreResult:
        """
        Look up a participant by registration ID.

        Returns:
            StoreResult with FOUND (record set), NOT_FOUND or STORE_ERROR
        """
        if self._engine is None:
            return _not_open_result()
        engine = self._engine
        try:
            with engine.connect() as conn:
                row = conn.execute(
                    select(participants_table).where(_key == registration_id)
                ).mappings().first()
        except SQLAlchemyError as e:
            logger.error(f"Search failed for {registration_id}: {e}")
            return StoreResult(StoreStatus.STORE_ERROR, message=str(e))

        if row is None:
            return StoreResult(StoreStatus.NOT_FOUND)
        return StoreResult(StoreStatus.FOUND, record=Participant.from_row(row))

    def update(self, registration_id: str, record: Participant) -> StoreResult:
        """
        Overwrite every non-key column of an existing participant.

        Args:
            registration_id: Row to update (the key itself never changes)
            record: New field values; record.registration_id is ignored

        Returns:
            StoreResult with UPDATED, NOT_FOUND (zero rows matched) or STORE_ERROR
        """
        values = record.to_row()
        values.pop(COLUMNS["registration_id"])

        if self._engine is None:
            return _not_open_result()
        engine = self._engine
        try:
            with engine.begin() as conn:
                result = conn.execute(
                    update(participants_table).where(_key == registration_id).values(**values)
                )
                affected = result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Update failed for {registration_id}: {e}")
            return StoreResult(StoreStatus.STORE_ERROR, message=str(e))

        if affected == 0:
            return StoreResult(StoreStatus.NOT_FOUND)

        logger.info("Participant updated: %s", registration_id)
        return StoreResult(
            StoreStatus.UPDATED,
            record=Participant.from_row({**values, COLUMNS["registration_id"]: registration_id}),
        )

    def delete_by_id(self, registration_id: str) -> StoreResult:
        """
        Remove a participant.

        Returns:
            StoreResult with DELETED, NOT_FOUND (zero rows matched) or STORE_ERROR
        """
        if self._engine is None:
            return _not_open_result()
        engine = self._engine
        try:
            with engine.begin() as conn:
                result = conn.execute(delete(participants_table).where(_key == registration_id))
                affected = result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Delete failed for {registration_id}: {e}")
            return StoreResult(StoreStatus.STORE_ERROR, message=str(e))

        if affected == 0:
            return StoreResult(StoreStatus.NOT_FOUND)

        logger.info("Participant deleted: %s", registration_id)
        return StoreResult(StoreStatus.DELETED)

    def count(self) -> int:
        """
        Number of stored participants.

        Raises:
            StoreError: If the store is closed or the query fails
        """
        engine = self._require_engine()
        try:
            with engine.connect() as conn:
                return conn.execute(select(func.count()).select_from(participants_table)).scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Count failed: {e}")
            raise StoreError(f"Error counting participants: {e}") from e
