"""
Job service for creating, updating and listing job postings.
"""

from ...core.exceptions import NotFoundError, ValidationException
from ...infrastructure.db.models import Job
from ...schemas.job_schemas import JobDetailsResponse, JobListRequest, JobListResponse, JobRequest
from ...utils.date import utc_now
from .base import BaseService
from .job_listing import build_job_list


class JobService(BaseService):
    """Service for job postings."""

    def get_service_name(self) -> str:
        return "JobService"

    async def create_job(self, request: JobRequest) -> Job:
        """
        Create a job with the next sequential code.

        The posted date starts out equal to the closing date.

        Raises:
            ValidationException: If required text is blank or the location
                or department does not exist
        """
        self.log_operation("create_job", {"title": request.title})
        self._validate_request(request)
        await self._ensure_references(request)

        job = Job(
            title=request.title,
            description=request.description,
            location_id=request.location_id,
            department_id=request.department_id,
            closing_date=request.closing_date,
            posted_date=request.closing_date,
        )
        job.code = await self.uow.jobs.generate_next_code()

        await self.uow.jobs.add(job)
        await self.uow.commit()

        self.logger.info(f"Job created: {job.code} (ID: {job.id})")
        return job

    async def update_job(self, job_id: int, request: JobRequest) -> Job:
        """
        Overwrite the editable fields of a job and re-post it now.

        Raises:
            ValidationException: If the request is invalid or references a
                missing location or department
            NotFoundError: If the job does not exist
        """
        self.log_operation("update_job", {"job_id": job_id})
        self.require_id(job_id, "id")
        self._validate_request(request)

        job = await self.uow.jobs.get(Job.id == job_id, tracked=True)
        if job is None:
            raise NotFoundError("Job", job_id)

        await self._ensure_references(request)

        job.title = request.title
        job.description = request.description
        job.location_id = request.location_id
        job.department_id = request.department_id
        job.closing_date = request.closing_date
        job.posted_date = utc_now()

        job = await self.uow.jobs.update(job)
        await self.uow.commit()

        self.logger.info(f"Job updated: {job.code} (ID: {job.id})")
        return job

    async def get_job_details(self, job_id: int) -> JobDetailsResponse:
        """Get a job with its location and department."""
        self.require_id(job_id, "id")

        job = await self.uow.jobs.get(Job.id == job_id, include=["location", "department"])
        if job is None:
            raise NotFoundError("Job", job_id)

        return JobDetailsResponse.model_validate(job)

    async def list_jobs(self, request: JobListRequest) -> JobListResponse:
        jobs = await self.uow.jobs.get_all(include=["location", "department"])
        return build_job_list(jobs, request)

    def _validate_request(self, request: JobRequest) -> None:
        self.require_text(request.title, "title")
        self.require_text(request.description, "description")
        self.require_id(request.location_id, "location_id")
        self.require_id(request.department_id, "department_id")

    async def _ensure_references(self, request: JobRequest) -> None:
        if not await self.uow.locations.any({"id": request.location_id}):
            raise ValidationException(
                f"Location {request.location_id} does not exist",
                field="location_id",
                value=request.location_id,
            )
        if not await self.uow.departments.any({"id": request.department_id}):
            raise ValidationException(
                f"Department {request.department_id} does not exist",
                field="department_id",
                value=request.department_id,
            )
