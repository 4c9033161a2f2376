"""
Location service.
"""

from typing import List

from ...core.exceptions import NotFoundError
from ...infrastructure.db.models import Location
from ...schemas.location_schemas import LocationRequest, LocationResponse
from ...utils.date import utc_now
from .base import BaseService


class LocationService(BaseService):
    """Service for job locations."""

    def get_service_name(self) -> str:
        return "LocationService"

    async def create_location(self, request: LocationRequest) -> Location:
        self.log_operation("create_location", {"title": request.title})
        self.require_text(request.title, "title")

        location = Location(**request.model_dump(), created_at=utc_now())
        await self.uow.locations.add(location)
        await self.uow.commit()

        self.logger.info(f"Location created: {location.title} (ID: {location.id})")
        return location

    async def list_locations(self) -> List[LocationResponse]:
        locations = await self.uow.locations.get_all()
        return [LocationResponse.model_validate(location) for location in locations]

    async def update_location(self, location_id: int, request: LocationRequest) -> Location:
        """
        Overwrite a location with the request values.

        Raises:
            ValidationException: If the id or title is invalid
            NotFoundError: If the location does not exist
        """
        self.log_operation("update_location", {"location_id": location_id})
        self.require_id(location_id, "id")
        self.require_text(request.title, "title")

        location = await self.uow.locations.get(Location.id == location_id, tracked=True)
        if location is None:
            raise NotFoundError("Location", location_id)

        for field, value in request.model_dump().items():
            setattr(location, field, value)
        location.updated_at = utc_now()

        location = await self.uow.locations.update(location)
        await self.uow.commit()

        self.logger.info(f"Location updated: {location.title} (ID: {location.id})")
        return location
