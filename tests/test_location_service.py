import pytest

from jobcatalog.application.services import LocationService
from jobcatalog.core.exceptions import NotFoundError, ValidationException
from jobcatalog.schemas import LocationRequest


async def test_create_location_sets_created_at(uow):
    location = await LocationService(uow).create_location(
        LocationRequest(title="Lisbon Hub", city="Lisbon", country="Portugal", zip="1100-148")
    )

    assert location.id is not None
    assert location.created_at is not None
    assert location.updated_at is None
    assert location.zip == "1100-148"


async def test_create_location_requires_title(uow):
    with pytest.raises(ValidationException) as exc_info:
        await LocationService(uow).create_location(LocationRequest(title=" "))

    assert exc_info.value.field == "title"


async def test_list_locations(uow, seed):
    locations = await LocationService(uow).list_locations()

    assert sorted(location.title for location in locations) == ["Berlin Office", "Remote"]


async def test_update_location(db, seed):
    async with db.unit_of_work() as uow:
        location = await LocationService(uow).update_location(
            seed["berlin"].id,
            LocationRequest(title="Berlin HQ", city="Berlin", country="Germany"),
        )

    assert location.updated_at is not None
    assert location.zip is None

    async with db.unit_of_work() as uow:
        titles = {item.title for item in await LocationService(uow).list_locations()}
    assert titles == {"Remote", "Berlin HQ"}


async def test_update_missing_location(uow, seed):
    with pytest.raises(NotFoundError):
        await LocationService(uow).update_location(9999, LocationRequest(title="Nowhere"))


async def test_update_location_rejects_non_positive_id(uow, seed):
    with pytest.raises(ValidationException):
        await LocationService(uow).update_location(0, LocationRequest(title="Nowhere"))
