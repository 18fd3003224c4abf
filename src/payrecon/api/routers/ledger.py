"""Payment ledger endpoints."""
from datetime import date, datetime
from fastapi import APIRouter, Depends
from payrecon.api.deps import get_now, get_uow
from payrecon.api.schemas.ledger import (
    PaymentCommitRequest, PaymentRecordList, PaymentRecordRead, SettlementStatusRead,
)
from payrecon.infra.db.uow import UnitOfWork
from payrecon.services.ledger_service import LedgerService

router = APIRouter(tags=["ledger"])


@router.post("/ledger/payments", response_model=PaymentRecordRead, status_code=201)
def commit_payment(
    payload: PaymentCommitRequest,
    uow: UnitOfWork = Depends(get_uow),
    now: datetime | None = Depends(get_now),
) -> PaymentRecordRead:
    return LedgerService(uow, now=now).commit_payment(payload)


@router.get("/ledger/status", response_model=SettlementStatusRead)
def get_status(
    employee_id: int, arrangement_id: int, start: date, end: date,
    uow: UnitOfWork = Depends(get_uow),
) -> SettlementStatusRead:
    return LedgerService(uow).get_status(employee_id, arrangement_id, start, end)


@router.get("/employees/{employee_id}/payments", response_model=PaymentRecordList)
def list_payments(
    employee_id: int, start: date, end: date, uow: UnitOfWork = Depends(get_uow),
) -> PaymentRecordList:
    return LedgerService(uow).list_payments(employee_id, start, end)
