"""Shared write helper for the SQL repositories."""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from blog_api.errors.database import DatabaseError, DatabaseWriteError, DuplicateEntryError
from blog_api.monitoring import get_logger

logger = get_logger(__name__)


class BaseRepository:
    """
    Base repository holding the request-scoped session.

    Error details raised from here are generic; the driver message is only
    kept on the exception chain and in the log.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def _add_and_refresh[ModelT: SQLModel](self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other integrity errors
            DatabaseWriteError: For any other database failure
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            logger.warning("integrity_error", table=record.__tablename__, error=error_msg)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError from e
            raise DatabaseError(detail="Database integrity error") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseWriteError(detail="Failed to save record") from e

    async def _delete(self, record: SQLModel) -> None:
        try:
            await self.session.delete(record)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseWriteError(detail="Failed to delete record") from e
