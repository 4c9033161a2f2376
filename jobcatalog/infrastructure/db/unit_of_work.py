"""
Unit of work over one database session.

A unit of work is created per logical operation, owns exactly one session
and exposes the job, location and department repositories bound to it.
Everything staged through those repositories is written by a single
``commit()``; a unit of work that exits without committing discards its
staged changes.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from ...core.config import Settings, get_settings
from ...core.exceptions import ConflictError, DatabaseError
from .repositories import DepartmentRepository, JobRepository, LocationRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Aggregates the repositories of one session under one commit."""

    def __init__(self, session: AsyncSession, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.session = session
        self.departments = DepartmentRepository(session)
        self.locations = LocationRepository(session)
        self.jobs = JobRepository(session, code_ordering=settings.job_code_ordering)

    async def commit(self) -> None:
        """
        Write every staged change in one transaction.

        Raises:
            ConflictError: If a storage constraint rejects the changes
            DatabaseError: If the storage engine fails otherwise
        """
        try:
            await self.session.commit()
            logger.debug(f"Unit of work committed: {id(self.session)}")
        except IntegrityError as e:
            await self.session.rollback()
            logger.error(f"Integrity error on commit: {e}")
            raise ConflictError(
                f"Changes conflict with existing data: {e.orig}",
                details={"statement": e.statement},
            ) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Commit failed: {e}")
            raise DatabaseError(f"Failed to commit changes: {str(e)}", operation="commit") from e

    async def rollback(self) -> None:
        """Discard every staged change."""
        await self.session.rollback()
        logger.debug(f"Unit of work rolled back: {id(self.session)}")

    async def close(self) -> None:
        if self.session.in_transaction():
            await self.rollback()
        await self.session.close()
        logger.debug(f"Unit of work closed: {id(self.session)}")

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
