"""Pay-rate endpoints."""
from fastapi import APIRouter, Depends
from payrecon.api.deps import get_uow
from payrecon.api.schemas.pay_rates import PayRateCreate, PayRateList, PayRateRead
from payrecon.infra.db.uow import UnitOfWork
from payrecon.services.rates_service import RatesService

router = APIRouter(prefix="/employees/{employee_id}/pay-rates", tags=["pay-rates"])


@router.post("", response_model=PayRateRead, status_code=201)
def set_rate(
    employee_id: int, payload: PayRateCreate, uow: UnitOfWork = Depends(get_uow),
) -> PayRateRead:
    return RatesService(uow).set_rate(employee_id, payload)


@router.get("", response_model=PayRateList)
def list_rates(
    employee_id: int, active_only: bool = False, uow: UnitOfWork = Depends(get_uow),
) -> PayRateList:
    return RatesService(uow).list_rates(employee_id, active_only=active_only)
