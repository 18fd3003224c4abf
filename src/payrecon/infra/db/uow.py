"""Unit of Work: one session per logical operation."""
from __future__ import annotations
from sqlmodel import Session
from payrecon.infra.db.engine import engine


class UnitOfWork:
    """Context manager wrapping a single DB session.

    Commits on clean exit, rolls back on exception, always closes. Nothing is
    cached across units of work; each read recomputes from current rows.
    """

    def __init__(self) -> None:
        self._session: Session | None = None

    def __enter__(self) -> "UnitOfWork":
        self._session = Session(engine, expire_on_commit=False)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self._session.commit()
            else:
                self._session.rollback()
        finally:
            self._session.close()
            self._session = None

    def _active(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork is not active; use it as a context manager.")
        return self._session

    @property
    def session(self) -> Session:
        return self._active()

    def commit(self) -> None:
        """Commit mid-operation, e.g. to make one correction durable before the next."""
        self._active().commit()

    def rollback(self) -> None:
        self._active().rollback()
