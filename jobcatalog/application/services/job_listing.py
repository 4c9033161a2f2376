"""
In-memory filtering, ordering and paging of loaded jobs.
"""

from typing import Iterable, List

from ...infrastructure.db.models import Job
from ...schemas.job_schemas import JobListItem, JobListRequest, JobListResponse


def filter_jobs(jobs: Iterable[Job], request: JobListRequest) -> List[Job]:
    """Apply the title, location and department filters of a listing request."""
    result = list(jobs)

    if request.q and request.q.strip():
        result = [job for job in result if job.title is not None and request.q in job.title]

    if request.location_id:
        result = [job for job in result if job.location_id == request.location_id]

    if request.department_id:
        result = [job for job in result if job.department_id == request.department_id]

    return result


def sort_by_posted_date(jobs: List[Job]) -> List[Job]:
    """Newest first; jobs without a posted date go last. Ties keep their order."""
    dated = [job for job in jobs if job.posted_date is not None]
    undated = [job for job in jobs if job.posted_date is None]
    return sorted(dated, key=lambda job: job.posted_date, reverse=True) + undated


def to_list_item(job: Job) -> JobListItem:
    return JobListItem(
        id=job.id,
        code=job.code,
        title=job.title,
        location=job.location.title if job.location else None,
        department=job.department.title if job.department else None,
        posted_date=job.posted_date,
        closing_date=job.closing_date,
    )


def build_job_list(jobs: Iterable[Job], request: JobListRequest) -> JobListResponse:
    """
    Build one page of the job listing.

    Args:
        jobs: Jobs with ``location`` and ``department`` loaded
        request: Filters and paging

    Returns:
        The filtered total and the requested page of list items
    """
    filtered = filter_jobs(jobs, request)
    total = len(filtered)

    ordered = sort_by_posted_date(filtered)
    start = (request.page_no - 1) * request.page_size
    page = ordered[start:start + request.page_size]

    return JobListResponse(total=total, data=[to_list_item(job) for job in page])
