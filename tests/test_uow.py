"""Unit tests for the UnitOfWork context manager."""
import pytest
from sqlmodel import Session, select
from payrecon.models.core import Employee
from payrecon.infra.db.uow import UnitOfWork


def test_commit_persists_record(use_test_engine):
    with UnitOfWork() as uow:
        emp = Employee(first_name="Committed")
        uow.session.add(emp)
        uow.commit()
        emp_id = emp.id

    # Verify in a separate session
    with Session(use_test_engine) as s:
        fetched = s.get(Employee, emp_id)
        assert fetched is not None
        assert fetched.first_name == "Committed"


def test_rollback_on_exception_reverts_record(use_test_engine):
    with Session(use_test_engine) as s:
        count_before = len(s.exec(select(Employee)).all())

    try:
        with UnitOfWork() as uow:
            uow.session.add(Employee(first_name="Will Be Rolled Back"))
            uow.session.flush()  # write to DB within transaction
            raise ValueError("forced error")
    except ValueError:
        pass

    # Record must not have been persisted
    with Session(use_test_engine) as s:
        count_after = len(s.exec(select(Employee)).all())

    assert count_after == count_before


def test_session_outside_context_raises(use_test_engine):
    uow = UnitOfWork()
    with pytest.raises(RuntimeError):
        uow.session
