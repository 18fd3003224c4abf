"""Employee endpoints."""
from fastapi import APIRouter, Depends
from payrecon.api.deps import get_uow
from payrecon.api.schemas.employees import EmployeeCreate, EmployeeList, EmployeeRead
from payrecon.infra.db.uow import UnitOfWork
from payrecon.services.employees_service import EmployeesService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post("", response_model=EmployeeRead, status_code=201)
def create_employee(payload: EmployeeCreate, uow: UnitOfWork = Depends(get_uow)) -> EmployeeRead:
    return EmployeesService(uow).create_employee(payload)


@router.get("", response_model=EmployeeList)
def list_employees(uow: UnitOfWork = Depends(get_uow)) -> EmployeeList:
    return EmployeesService(uow).list_employees()


@router.get("/{employee_id}", response_model=EmployeeRead)
def get_employee(employee_id: int, uow: UnitOfWork = Depends(get_uow)) -> EmployeeRead:
    return EmployeesService(uow).get_employee(employee_id)
