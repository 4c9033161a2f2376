import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from ..models.department import Department
from .base import Repository

logger = logging.getLogger(__name__)


class DepartmentRepository(Repository[Department]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Department)

    async def update(self, department: Department) -> Department:
        """Mark a department so its current field values are written on commit."""
        merged = await self.session.merge(department)
        logger.debug(f"Staged update of Department with ID: {merged.id}")
        return merged
