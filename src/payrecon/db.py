"""Engine singleton and table creation."""
from __future__ import annotations
from pathlib import Path
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, create_engine

from payrecon.config import settings


def _make_engine():
    url = make_url(settings.DATABASE_URL)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        connect_args["check_same_thread"] = False
    return create_engine(settings.DATABASE_URL, echo=False, connect_args=connect_args)


engine = _make_engine()


def init_db() -> None:
    import payrecon.models  # noqa: F401  registers table mappers
    SQLModel.metadata.create_all(engine)
