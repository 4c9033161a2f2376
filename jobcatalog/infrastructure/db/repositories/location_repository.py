import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from ..models.location import Location
from .base import Repository

logger = logging.getLogger(__name__)


class LocationRepository(Repository[Location]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Location)

    async def update(self, location: Location) -> Location:
        """Mark a location so its current field values are written on commit."""
        merged = await self.session.merge(location)
        logger.debug(f"Staged update of Location with ID: {merged.id}")
        return merged
