"""
Department service.
"""

from typing import List

from ...core.exceptions import NotFoundError
from ...infrastructure.db.models import Department
from ...schemas.department_schemas import DepartmentRequest, DepartmentResponse
from .base import BaseService


class DepartmentService(BaseService):
    """Service for departments."""

    def get_service_name(self) -> str:
        return "DepartmentService"

    async def create_department(self, request: DepartmentRequest) -> Department:
        self.log_operation("create_department", {"title": request.title})
        self.require_text(request.title, "title")

        department = Department(title=request.title)
        await self.uow.departments.add(department)
        await self.uow.commit()

        self.logger.info(f"Department created: {department.title} (ID: {department.id})")
        return department

    async def list_departments(self) -> List[DepartmentResponse]:
        departments = await self.uow.departments.get_all()
        return [DepartmentResponse.model_validate(department) for department in departments]

    async def update_department(self, department_id: int, request: DepartmentRequest) -> Department:
        self.log_operation("update_department", {"department_id": department_id})
        self.require_id(department_id, "id")
        self.require_text(request.title, "title")

        department = await self.uow.departments.get(Department.id == department_id, tracked=True)
        if department is None:
            raise NotFoundError("Department", department_id)

        department.title = request.title
        department = await self.uow.departments.update(department)
        await self.uow.commit()

        self.logger.info(f"Department updated: {department.title} (ID: {department.id})")
        return department
