"""Employee directory use-case service."""
from __future__ import annotations
from payrecon.domain.exceptions import NotFoundError
from payrecon.infra.db.uow import UnitOfWork
from payrecon.infra.db.repositories.employee_repository import EmployeeRepository
from payrecon.api.schemas.employees import EmployeeCreate, EmployeeList, EmployeeRead


class EmployeesService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def create_employee(self, payload: EmployeeCreate) -> EmployeeRead:
        repo = EmployeeRepository(self._uow.session)
        employee = repo.create(
            first_name=payload.first_name, last_name=payload.last_name, role=payload.role,
        )
        self._uow.commit()
        return EmployeeRead.model_validate(employee)

    def list_employees(self) -> EmployeeList:
        repo = EmployeeRepository(self._uow.session)
        employees = repo.list_all()
        return EmployeeList(items=[EmployeeRead.model_validate(e) for e in employees], total=repo.count())

    def get_employee(self, employee_id: int) -> EmployeeRead:
        employee = EmployeeRepository(self._uow.session).get_by_id(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")
        return EmployeeRead.model_validate(employee)
