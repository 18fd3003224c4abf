"""FastAPI dependencies."""
from __future__ import annotations
from datetime import datetime
from typing import Generator
from payrecon.infra.db.uow import UnitOfWork


def get_uow() -> Generator[UnitOfWork, None, None]:
    """Yield one UnitOfWork per request; commit/rollback in __exit__."""
    with UnitOfWork() as uow:
        yield uow


def get_now() -> datetime | None:
    """Reference instant for period windows. None means the real clock; tests override this."""
    return None
