from datetime import datetime, timedelta

import pytest

from jobcatalog.core.config import Settings
from jobcatalog.infrastructure.db import DatabaseManager, Department, Job, Location


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
async def db(settings):
    manager = DatabaseManager(settings)
    await manager.connect()
    yield manager
    await manager.disconnect()


@pytest.fixture
async def uow(db):
    async with db.unit_of_work() as uow:
        yield uow


@pytest.fixture
async def seed(db):
    """Two locations, two departments, no jobs."""
    async with db.unit_of_work() as uow:
        remote = Location(title="Remote", city="Anywhere", country="Earth", zip="00000")
        berlin = Location(title="Berlin Office", city="Berlin", country="Germany", zip="10115")
        engineering = Department(title="Engineering")
        sales = Department(title="Sales")
        for entity in (remote, berlin):
            await uow.locations.add(entity)
        for entity in (engineering, sales):
            await uow.departments.add(entity)
        await uow.commit()

    return {
        "remote": remote,
        "berlin": berlin,
        "engineering": engineering,
        "sales": sales,
    }


@pytest.fixture
async def add_jobs(db, seed):
    """Insert jobs directly: ``await add_jobs(("JOB-01", "Backend Engineer", days_ago), ...)``."""
    base = datetime(2024, 6, 1, 12, 0, 0)

    async def _add(*rows, location=None, department=None):
        location = location or seed["remote"]
        department = department or seed["engineering"]
        jobs = []
        async with db.unit_of_work() as uow:
            for code, title, days_ago in rows:
                posted = base - timedelta(days=days_ago) if days_ago is not None else None
                job = Job(
                    code=code,
                    title=title,
                    description=f"{title} role",
                    location_id=location.id,
                    department_id=department.id,
                    posted_date=posted,
                    closing_date=base + timedelta(days=30),
                )
                await uow.jobs.add(job)
                jobs.append(job)
            await uow.commit()
        return jobs

    return _add
