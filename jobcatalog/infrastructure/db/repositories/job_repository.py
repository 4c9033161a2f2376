import logging
import re
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ....core.exceptions import DatabaseError
from ..models.job import Job
from .base import Repository

logger = logging.getLogger(__name__)

JOB_CODE_PREFIX = "JOB-"
JOB_CODE_PATTERN = re.compile(r"JOB-(\d+)")

CODE_ORDERING_NUMERIC = "numeric"
CODE_ORDERING_LEXICOGRAPHIC = "lexicographic"


def format_job_code(number: int) -> str:
    """Format a sequence number as JOB-01 .. JOB-09, JOB-10, JOB-100."""
    if number < 10:
        return f"{JOB_CODE_PREFIX}{number:02d}"
    return f"{JOB_CODE_PREFIX}{number}"


def next_job_code(last_code: Optional[str]) -> str:
    """Code that follows ``last_code``; malformed or missing codes restart at 1."""
    next_number = 1
    if last_code:
        match = JOB_CODE_PATTERN.fullmatch(last_code)
        if match:
            next_number = int(match.group(1)) + 1
    return format_job_code(next_number)


class JobRepository(Repository[Job]):
    """
    Repository for jobs, with sequential code allocation.

    ``code_ordering`` decides which existing code counts as the last one:

    - ``numeric`` orders by code length, then by code, so ``JOB-100``
      follows ``JOB-99``.
    - ``lexicographic`` orders by the code string only. Once three digit
      codes exist ``JOB-99`` still sorts last and the allocator hands out a
      code that is already taken; the unique index on ``jobs.code`` rejects
      it at commit.

    Allocation reads then increments without a lock. Two units of work
    creating jobs at the same time can pick the same code, and the second
    commit fails with a conflict.
    """

    def __init__(self, session: AsyncSession, code_ordering: str = CODE_ORDERING_NUMERIC):
        if code_ordering not in (CODE_ORDERING_NUMERIC, CODE_ORDERING_LEXICOGRAPHIC):
            raise ValueError(f"Unsupported job code ordering: {code_ordering}")
        super().__init__(session, Job)
        self.code_ordering = code_ordering

    async def update(self, job: Job) -> Job:
        """Mark a job so its current field values are written on commit."""
        merged = await self.session.merge(job)
        logger.debug(f"Staged update of Job with ID: {merged.id}")
        return merged

    async def get_last_code(self) -> Optional[str]:
        """Highest existing job code under the configured ordering."""
        statement = select(Job.code).where(Job.code.is_not(None))

        if self.code_ordering == CODE_ORDERING_NUMERIC:
            statement = statement.order_by(func.length(Job.code).desc(), Job.code.desc())
        else:
            statement = statement.order_by(Job.code.desc())

        try:
            result = await self.session.exec(statement.limit(1))
            return result.first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read last job code: {e}")
            raise DatabaseError(f"Failed to read last job code: {str(e)}", operation="get_last_code") from e

    async def generate_next_code(self) -> str:
        """
        Allocate the code for a new job.

        Returns:
            ``JOB-01`` when no job exists yet, otherwise the code after the
            last one
        """
        last_code = await self.get_last_code()
        code = next_job_code(last_code)
        logger.debug(f"Allocated job code {code} (last: {last_code}, ordering: {self.code_ordering})")
        return code
