"""Repository for Employee records. No business logic; caller owns the transaction."""
from __future__ import annotations
from sqlalchemy import func
from sqlmodel import Session, select
from payrecon.models.core import Employee


class EmployeeRepository:
    def __init__(self, session: Session) -> None:
        self._s = session

    def get_by_id(self, employee_id: int) -> Employee | None:
        return self._s.get(Employee, employee_id)

    def list_all(self, *, active_only: bool = False) -> list[Employee]:
        stmt = select(Employee)
        if active_only:
            stmt = stmt.where(Employee.active == True)  # noqa: E712
        return list(self._s.exec(stmt.order_by(Employee.id)).all())

    def count(self) -> int:
        return self._s.exec(select(func.count()).select_from(Employee)).one()

    def create(self, *, first_name: str, last_name: str | None = None, role: str = "Staff") -> Employee:
        employee = Employee(first_name=first_name, last_name=last_name, role=role)
        self._s.add(employee)
        self._s.flush()
        return employee
