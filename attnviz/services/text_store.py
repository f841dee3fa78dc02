"""
AttnViz Backend: Text Store (Persistence + Validation)
=========================================================

What:  Owns the persisted `texts` collection: list, get, create, update, delete.
Why:   Keeps validation and database access in one place, independent of HTTP.
How:   Each public method opens its own session, runs a single statement and
       commits (or rolls back). Operations are individually atomic; there are
       no multi-record transactions.
Who:   Constructed once in create_app() around the app's engine and injected
       into the routes through FastAPI dependencies.

Error translation:
    len(text) > max_text_length   → ValidationError (before any SQL runs)
    no row for id (get / update)  → NotFoundError
    id outside the 64-bit range   → treated as a missing row (no SQL runs)
    any SQLAlchemyError           → StoreError with the driver's error text

Concurrency:
    Concurrent update/delete on the same id race; the database's statement
    atomicity decides, last writer wins. No extra locking.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from attnviz.config import Settings
from attnviz.database import Base, build_engine, build_session_factory
from attnviz.exceptions import NotFoundError, StoreError, ValidationError
from attnviz.models.text import TextRecord
from attnviz.schemas.text import TextResponse

logger = logging.getLogger(__name__)

DEFAULT_MAX_TEXT_LENGTH = 100

# Integer primary keys are signed 64-bit on every supported backend
MIN_TEXT_ID = -(2**63)
MAX_TEXT_ID = 2**63 - 1


def _error_text(exc: SQLAlchemyError) -> str:
    # DBAPIError wraps the driver exception; its text is the useful part
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _storable_id(text_id: int) -> bool:
    return MIN_TEXT_ID <= text_id <= MAX_TEXT_ID


class TextStore:
    """
    Data-access layer for text records.

    Attributes:
        engine:           Async engine owning the connection pool
        max_text_length:  Inclusive upper bound on len(text), in characters
    """

    def __init__(self, engine: AsyncEngine, max_text_length: int = DEFAULT_MAX_TEXT_LENGTH):
        self.engine = engine
        self.max_text_length = max_text_length
        self._session_factory = build_session_factory(engine)

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "TextStore":
        return cls(build_engine(app_settings), max_text_length=app_settings.max_text_length)

    # ── Session Handling ──────────────────────────────────────────────────

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        """
        Session for a single store operation.

        Commits on success, rolls back on any error. Database failures are
        re-raised as StoreError; application exceptions (NotFoundError)
        propagate unchanged.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Store error during %s: %s", operation, _error_text(e))
                raise StoreError(
                    message=_error_text(e),
                    context={"operation": operation, "error_type": type(e).__name__},
                ) from e
            except Exception:
                await session.rollback()
                raise

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def create_schema(self) -> None:
        """
        Create the `texts` table if it does not exist.

        Idempotent: CREATE TABLE is only emitted for missing tables, so this
        is safe to run on every startup.
        """
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StoreError(
                message=_error_text(e),
                context={"operation": "create_schema"},
            ) from e
        logger.info("Schema ready (table: %s)", TextRecord.__tablename__)

    async def ping(self) -> bool:
        """Lightweight connectivity check (SELECT 1) for the health endpoint."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Store ping failed: %s", _error_text(e))
            return False

    async def close(self) -> None:
        """Dispose the engine, closing every pooled connection."""
        await self.engine.dispose()

    # ── Validation ────────────────────────────────────────────────────────

    def validate_text(self, value: str) -> None:
        """
        Reject texts longer than max_text_length.

        Never truncates. The empty string is a valid text.
        """
        if len(value) > self.max_text_length:
            raise ValidationError(
                message=f"Text exceeds {self.max_text_length} characters",
                field="text",
                context={"length": len(value), "max_length": self.max_text_length},
            )

    # ── Operations ────────────────────────────────────────────────────────

    async def list_texts(self) -> List[TextResponse]:
        """
        All records in primary-key (insertion) order.

        Query plan:
            SELECT id, text FROM texts ORDER BY id
        """
        async with self._session("list") as session:
            result = await session.execute(select(TextRecord).order_by(TextRecord.id))
            records = list(result.scalars().all())
        return [TextResponse.model_validate(record) for record in records]

    async def get_text(self, text_id: int) -> TextResponse:
        """
        Fetch one record.

        Raises:
            NotFoundError: No record with this id
            StoreError:    Query execution failed
        """
        if not _storable_id(text_id):
            raise NotFoundError(resource="text", resource_id=text_id)
        async with self._session("get") as session:
            record = await session.get(TextRecord, text_id)
            if record is None:
                raise NotFoundError(resource="text", resource_id=text_id)
            return TextResponse.model_validate(record)

    async def create_text(self, value: str) -> TextResponse:
        """
        Validate and insert a new record; the database assigns the id.

        Raises:
            ValidationError: Text too long (nothing is inserted)
            StoreError:      Insert failed
        """
        self.validate_text(value)
        async with self._session("create") as session:
            record = TextRecord(text=value)
            session.add(record)
            await session.flush()  # Populates record.id
            created = TextResponse.model_validate(record)
        logger.info("Text %d created (%d chars)", created.id, len(value))
        return created

    async def update_text(self, text_id: int, value: str) -> TextResponse:
        """
        Replace the text of an existing record; the id never changes.

        Validation runs first, so an over-long text is rejected even for an
        unknown id. An update that matches no row raises NotFoundError rather
        than reporting a record that does not exist.

        Raises:
            ValidationError: Text too long (the stored row is untouched)
            NotFoundError:   No record with this id
            StoreError:      Update failed
        """
        self.validate_text(value)
        if not _storable_id(text_id):
            raise NotFoundError(resource="text", resource_id=text_id)
        async with self._session("update") as session:
            result = await session.execute(
                update(TextRecord)
                .where(TextRecord.id == text_id)
                .values(text=value)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource="text", resource_id=text_id)
        logger.info("Text %d updated (%d chars)", text_id, len(value))
        return TextResponse(id=text_id, text=value)

    async def delete_text(self, text_id: int) -> None:
        """
        Delete a record. Succeeds whether or not a row matched.

        Raises:
            StoreError: Delete failed
        """
        if not _storable_id(text_id):
            logger.debug("Delete of text %d skipped: id out of range", text_id)
            return
        async with self._session("delete") as session:
            result = await session.execute(
                delete(TextRecord)
                .where(TextRecord.id == text_id)
                .execution_options(synchronize_session=False)
            )
            deleted = result.rowcount
        if deleted:
            logger.info("Text %d deleted", text_id)
        else:
            logger.debug("Delete of text %d matched no row", text_id)
