"""Typed HTTP client for Streamlit pages.

Only imports from ``payrecon.api.schemas``; never ORM, never DB.
Instantiate via ``get_client()`` which caches per Streamlit session.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any

import httpx
import streamlit as st

from payrecon.api.schemas.employees import EmployeeCreate, EmployeeRead, EmployeeList
from payrecon.api.schemas.pay_rates import PayRateCreate, PayRateRead, PayRateList
from payrecon.api.schemas.timeclock import (
    ClockEventCreate, ClockEventRead, CorrectionRequest, CorrectionResult,
    EventMutationResult, ShiftList,
)
from payrecon.api.schemas.payroll import (
    FlaggedActivityList, PayrollPeriodResponse, QuickPayRead, RedFlagResponse, WeekWindowRead,
)
from payrecon.api.schemas.ledger import (
    PaymentCommitRequest, PaymentRecordList, PaymentRecordRead, SettlementStatusRead,
)
from payrecon.config import settings
from payrecon.domain.enums import PeriodSelection


_DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class APIError(Exception):
    """Raised when the backend returns a 4xx/5xx response."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")


class PayReconClient:
    """One method per backend endpoint.  All return pure Pydantic DTOs."""

    def __init__(self, base_url: str = _DEFAULT_BASE_URL, *, transport: httpx.BaseTransport | None = None) -> None:
        self._client = httpx.Client(base_url=base_url, timeout=30.0, transport=transport)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        raise APIError(resp.status_code, str(detail))

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    def list_employees(self) -> EmployeeList:
        resp = self._client.get("/employees")
        self._raise_for_status(resp)
        return EmployeeList.model_validate(resp.json())

    def create_employee(self, payload: EmployeeCreate) -> EmployeeRead:
        resp = self._client.post("/employees", json=payload.model_dump())
        self._raise_for_status(resp)
        return EmployeeRead.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Pay rates
    # ------------------------------------------------------------------

    def list_pay_rates(self, employee_id: int, *, active_only: bool = False) -> PayRateList:
        resp = self._client.get(
            f"/employees/{employee_id}/pay-rates", params={"active_only": active_only},
        )
        self._raise_for_status(resp)
        return PayRateList.model_validate(resp.json())

    def set_pay_rate(self, employee_id: int, payload: PayRateCreate) -> PayRateRead:
        resp = self._client.post(
            f"/employees/{employee_id}/pay-rates", json=payload.model_dump(mode="json"),
        )
        self._raise_for_status(resp)
        return PayRateRead.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Time clock
    # ------------------------------------------------------------------

    def record_event(self, employee_id: int, payload: ClockEventCreate) -> ClockEventRead:
        resp = self._client.post(
            f"/employees/{employee_id}/clock-events", json=payload.model_dump(mode="json"),
        )
        self._raise_for_status(resp)
        return ClockEventRead.model_validate(resp.json())

    def list_shifts(self, employee_id: int, period: PeriodSelection) -> ShiftList:
        resp = self._client.get(
            f"/employees/{employee_id}/shifts", params={"period": period.value},
        )
        self._raise_for_status(resp)
        return ShiftList.model_validate(resp.json())

    def apply_corrections(self, employee_id: int, payload: CorrectionRequest) -> CorrectionResult:
        resp = self._client.post(
            f"/employees/{employee_id}/corrections",
            json=payload.model_dump(mode="json", exclude_none=True),
        )
        self._raise_for_status(resp)
        return CorrectionResult.model_validate(resp.json())

    def update_event(self, event_id: int, timestamp: datetime) -> EventMutationResult:
        resp = self._client.patch(
            f"/clock-events/{event_id}", json={"timestamp": timestamp.isoformat()},
        )
        self._raise_for_status(resp)
        return EventMutationResult.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Payroll
    # ------------------------------------------------------------------

    def get_window(self, period: PeriodSelection) -> WeekWindowRead:
        resp = self._client.get("/payroll/window", params={"period": period.value})
        self._raise_for_status(resp)
        return WeekWindowRead.model_validate(resp.json())

    def get_payroll(self, period: PeriodSelection) -> PayrollPeriodResponse:
        resp = self._client.get("/payroll", params={"period": period.value})
        self._raise_for_status(resp)
        return PayrollPeriodResponse.model_validate(resp.json())

    def list_flagged(self, period: PeriodSelection) -> FlaggedActivityList:
        resp = self._client.get("/payroll/flagged", params={"period": period.value})
        self._raise_for_status(resp)
        return FlaggedActivityList.model_validate(resp.json())

    def list_red_flags(self, period: PeriodSelection) -> RedFlagResponse:
        resp = self._client.get("/payroll/red-flags", params={"period": period.value})
        self._raise_for_status(resp)
        return RedFlagResponse.model_validate(resp.json())

    def quick_pay(self, employee_id: int, arrangement_id: int, period: PeriodSelection) -> QuickPayRead:
        resp = self._client.get(
            f"/employees/{employee_id}/quick-pay",
            params={"arrangement_id": arrangement_id, "period": period.value},
        )
        self._raise_for_status(resp)
        return QuickPayRead.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    def commit_payment(self, payload: PaymentCommitRequest) -> PaymentRecordRead:
        resp = self._client.post("/ledger/payments", json=payload.model_dump(mode="json"))
        self._raise_for_status(resp)
        return PaymentRecordRead.model_validate(resp.json())

    def get_settlement_status(
        self, employee_id: int, arrangement_id: int, start: date, end: date,
    ) -> SettlementStatusRead:
        params: dict[str, Any] = {
            "employee_id": employee_id,
            "arrangement_id": arrangement_id,
            "start": start.isoformat(),
            "end": end.isoformat(),
        }
        resp = self._client.get("/ledger/status", params=params)
        self._raise_for_status(resp)
        return SettlementStatusRead.model_validate(resp.json())

    def list_payments(self, employee_id: int, start: date, end: date) -> PaymentRecordList:
        resp = self._client.get(
            f"/employees/{employee_id}/payments",
            params={"start": start.isoformat(), "end": end.isoformat()},
        )
        self._raise_for_status(resp)
        return PaymentRecordList.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def health(self) -> dict:
        resp = self._client.get("/health")
        self._raise_for_status(resp)
        return resp.json()


# ------------------------------------------------------------------
# Streamlit helper: one client per session
# ------------------------------------------------------------------

def get_client() -> PayReconClient:
    """Return a cached ``PayReconClient`` for the current Streamlit session."""
    if "payrecon_api_client" not in st.session_state:
        base_url = st.session_state.get("payrecon_api_url", settings.API_BASE_URL or _DEFAULT_BASE_URL)
        st.session_state["payrecon_api_client"] = PayReconClient(base_url=base_url)
    return st.session_state["payrecon_api_client"]
