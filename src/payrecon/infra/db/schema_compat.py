"""Runtime DB compatibility helpers for older SQLite ledgers.

Ledgers created before split pay have no ``arrangement_id`` or
``estimated_amount`` on payment records, and no settlement uniqueness index.
These helpers backfill those additive changes for deployments that rely on
``SQLModel.metadata.create_all()`` instead of migrations.
"""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, OperationalError

from payrecon.models.pay import SETTLEMENT_UNIQUE_INDEX

logger = logging.getLogger(__name__)

_SETTLEMENT_COLUMNS = ("employee_id", "arrangement_id", "pay_period_start", "pay_period_end")


def ensure_schema_compat(engine: Engine) -> None:
    """Apply additive compatibility upgrades for existing SQLite databases."""
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as conn:
        _ensure_paymentrecord_columns(conn)
    _ensure_settlement_index(engine)


def _ensure_paymentrecord_columns(conn: Connection) -> None:
    if not _table_exists(conn, "paymentrecord"):
        return

    if not _column_exists(conn, "paymentrecord", "arrangement_id"):
        conn.execute(text("ALTER TABLE paymentrecord ADD COLUMN arrangement_id INTEGER"))
        logger.info("Applied compatibility upgrade: added paymentrecord.arrangement_id")

    if not _column_exists(conn, "paymentrecord", "estimated_amount"):
        conn.execute(text("ALTER TABLE paymentrecord ADD COLUMN estimated_amount FLOAT"))
        conn.execute(text(
            "UPDATE paymentrecord SET estimated_amount = hours_worked * hourly_rate "
            "WHERE estimated_amount IS NULL"
        ))
        logger.info("Applied compatibility upgrade: added paymentrecord.estimated_amount")


def _ensure_settlement_index(engine: Engine) -> None:
    """Create the unique settlement index in its own transaction.

    A legacy ledger that already holds a duplicate settlement cannot take the
    index; that is logged and the rest of startup proceeds.
    """
    try:
        with engine.begin() as conn:
            if not _table_exists(conn, "paymentrecord"):
                return
            if _index_exists(conn, SETTLEMENT_UNIQUE_INDEX) or _has_unique_autoindex(conn):
                return
            cols = ", ".join(_SETTLEMENT_COLUMNS)
            conn.execute(text(
                f"CREATE UNIQUE INDEX {SETTLEMENT_UNIQUE_INDEX} ON paymentrecord ({cols})"
            ))
            logger.info("Applied compatibility upgrade: created %s", SETTLEMENT_UNIQUE_INDEX)
    except (IntegrityError, OperationalError) as exc:
        logger.warning("Could not create %s; ledger holds duplicate settlements: %s",
                       SETTLEMENT_UNIQUE_INDEX, exc)


def _table_exists(conn: Connection, table_name: str) -> bool:
    return (
        conn.execute(
            text(
                "SELECT 1 FROM sqlite_master "
                "WHERE type = 'table' AND name = :name LIMIT 1"
            ),
            {"name": table_name},
        ).first()
        is not None
    )


def _column_exists(conn: Connection, table_name: str, column_name: str) -> bool:
    rows = conn.execute(text(f"PRAGMA table_info({table_name})")).fetchall()
    return any(row[1] == column_name for row in rows)


def _index_exists(conn: Connection, index_name: str) -> bool:
    return (
        conn.execute(
            text(
                "SELECT 1 FROM sqlite_master "
                "WHERE type = 'index' AND name = :name LIMIT 1"
            ),
            {"name": index_name},
        ).first()
        is not None
    )


def _has_unique_autoindex(conn: Connection) -> bool:
    """A table created with the UniqueConstraint carries it as an autoindex."""
    for row in conn.execute(text("PRAGMA index_list(paymentrecord)")).fetchall():
        name, unique = row[1], row[2]
        if not unique:
            continue
        cols = [r[2] for r in conn.execute(text(f"PRAGMA index_info('{name}')")).fetchall()]
        if tuple(cols) == _SETTLEMENT_COLUMNS:
            return True
    return False
