"""Shared test fixtures.

  use_test_engine : redirects UoW + infra layer to a temp-file SQLite DB.
  client          : FastAPI TestClient wired to the test engine, with a pinned clock.
  seed            : small helpers that write rows straight through the ORM.
"""
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from sqlmodel import SQLModel, create_engine, Session

ET = ZoneInfo("America/New_York")

# Wednesday of the week 2025-01-13 .. 2025-01-19.
FIXED_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=ET)


@pytest.fixture
def use_test_engine(tmp_path, monkeypatch):
    """Monkeypatch infra/db engine references to an isolated temp-file SQLite DB."""
    db_path = tmp_path / "test_payrecon.db"
    test_engine = create_engine(f"sqlite:///{db_path}", echo=False)

    import payrecon.models  # noqa: F401  register all ORM mappers
    SQLModel.metadata.create_all(test_engine)

    monkeypatch.setattr("payrecon.infra.db.engine.engine", test_engine)
    monkeypatch.setattr("payrecon.infra.db.uow.engine", test_engine)

    yield test_engine

    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def client(use_test_engine):
    """FastAPI TestClient backed by the isolated test engine."""
    from fastapi.testclient import TestClient
    from payrecon.api.app import create_app
    from payrecon.api.deps import get_now

    app = create_app()
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    with TestClient(app) as c:
        yield c


class Seeder:
    def __init__(self, engine) -> None:
        self._engine = engine

    def _add(self, row):
        with Session(self._engine, expire_on_commit=False) as s:
            s.add(row)
            s.commit()
            s.refresh(row)
        return row

    def employee(self, first_name, last_name=None, *, role="Staff", active=True):
        from payrecon.models.core import Employee
        return self._add(Employee(first_name=first_name, last_name=last_name, role=role, active=active))

    def rate(self, employee_id, rate, *, schedule, tax, method="cash", effective=None):
        from payrecon.domain.enums import PaymentMethod, PaySchedule, TaxClassification
        from payrecon.models.pay import PayRateArrangement
        return self._add(PayRateArrangement(
            employee_id=employee_id,
            rate=rate,
            pay_schedule=PaySchedule(schedule),
            tax_classification=TaxClassification(tax),
            payment_method=PaymentMethod(method),
            effective_date=effective or FIXED_NOW.date(),
        ))

    def punch(self, employee_id, event_type, ts, *, edited=False):
        from payrecon.domain.enums import ClockEventType
        from payrecon.domain.shifts import as_utc
        from payrecon.models.timeclock import ClockEvent
        return self._add(ClockEvent(
            employee_id=employee_id,
            event_type=ClockEventType(event_type),
            event_timestamp=as_utc(ts),
            manually_edited=edited,
        ))

    def shift(self, employee_id, start, end, *, edited_out=False):
        self.punch(employee_id, "in", start)
        return self.punch(employee_id, "out", end, edited=edited_out)


@pytest.fixture
def seed(use_test_engine):
    return Seeder(use_test_engine)
