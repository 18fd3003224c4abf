import os
import sys
from datetime import datetime
from pathlib import Path

import typer
from sqlalchemy.engine import make_url

from payrecon.config import settings
from payrecon.domain.enums import PeriodSelection
from payrecon.logging import logger, get_run_id

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main():
    """
    Payroll reconciliation CLI.
    """
    pass


@app.command(name="doctor")
def doctor():
    """
    Check configuration and environment health.
    """
    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🩺 Payroll Doctor\n")

    # ── Check 1: Environment / Interpreter ──────────────────────────────────
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Prefix: {sys.prefix}")
    print(f"  Run ID: {get_run_id()}")
    passed += 1

    # ── Check 2: Business calendar ───────────────────────────────────────────
    print("\n[Business Calendar]")
    now_local = datetime.now(settings.business_tz)
    print(f"  BUSINESS_TIMEZONE:               ✅ {settings.BUSINESS_TIMEZONE} (now {now_local:%Y-%m-%d %H:%M %Z})")
    passed += 1
    print(f"  AUTO_CLOCKOUT_TIME:              {settings.AUTO_CLOCKOUT_TIME}")
    print(f"  AUTO_CLOCKOUT_TOLERANCE_MINUTES: {settings.AUTO_CLOCKOUT_TOLERANCE_MINUTES}")
    print(f"  SPLIT_PAY_BASE_HOURS:            {settings.SPLIT_PAY_BASE_HOURS}")
    if settings.AUTO_CLOCKOUT_TOLERANCE_MINUTES < 0:
        failures.append("AUTO_CLOCKOUT_TOLERANCE_MINUTES must not be negative")
    else:
        passed += 1

    # ── Check 3: Database location ───────────────────────────────────────────
    print("\n[Database]")
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        print(f"  {url.render_as_string(hide_password=True)}  ⚠️  Skipped (not a SQLite file)")
    else:
        db_file = Path(url.database)
        if db_file.exists():
            if os.access(db_file, os.W_OK):
                print(f"  {db_file}  ✅ Exists and writable")
                passed += 1
            else:
                print(f"  {db_file}  ❌ Exists but NOT writable")
                failures.append(f"{db_file} exists but is not writable — check file permissions")
        elif os.access(db_file.parent, os.W_OK):
            print(f"  {db_file}  ✅ Does not exist yet; {db_file.parent}/ is writable")
            passed += 1
        else:
            print(f"  {db_file}  ❌ {db_file.parent}/ is not writable")
            failures.append(f"{db_file.parent}/ is not writable — db init cannot create the ledger")

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    else:
        print(f"Result: {passed}/{total} checks passed — all good ✅")
        print()


db_app = typer.Typer(help="Database management commands.")
app.add_typer(db_app, name="db")


@db_app.command("init")
def init():
    """Create tables and apply compatibility upgrades."""
    from payrecon.db import init_db
    from payrecon.infra.db.engine import engine
    from payrecon.infra.db.schema_compat import ensure_schema_compat
    try:
        init_db()
        ensure_schema_compat(engine)
        logger.info("Database initialized successfully.")
        print("✅ Database initialized.")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        print(f"❌ Failed: {e}")
        raise typer.Exit(code=1)


payroll_app = typer.Typer(help="Payroll period commands.")
app.add_typer(payroll_app, name="payroll")


@payroll_app.command("window")
def window(period: PeriodSelection = typer.Option(PeriodSelection.THIS, help="this | last | lastPayPeriod")):
    """Print the business-timezone date range for a period."""
    from payrecon.domain.week_window import compute_week_window
    w = compute_week_window(period, datetime.now(settings.business_tz), settings.business_tz)
    print(f"{w.selection.value}: {w.start} → {w.display_end} (end exclusive {w.end})")


@payroll_app.command("summary")
def summary(period: PeriodSelection = typer.Option(PeriodSelection.THIS, help="this | last | lastPayPeriod")):
    """Print hours, allocations and payment status per employee."""
    from payrecon.domain.display import format_hours_minutes
    from payrecon.domain.exceptions import PayrollLoadError
    from payrecon.infra.db.uow import UnitOfWork
    from payrecon.services.payroll_service import PayrollService

    try:
        with UnitOfWork() as uow:
            data = PayrollService(uow).get_period(period)
    except PayrollLoadError as e:
        print(f"❌ {e.message}")
        raise typer.Exit(code=1)

    print(f"Payroll {data.window.start} → {data.window.display_end}\n")
    if not data.employees:
        print("No employees with hours in this period.")
        return
    for emp in data.employees:
        warn = " ⚠️ incomplete shifts" if emp.has_incomplete_shifts else ""
        print(f"{emp.name:<24} {format_hours_minutes(emp.total_hours):>8}  {emp.status.value:<8}{warn}")
        for a in emp.allocations:
            print(f"    {a.pay_schedule.value:<9} {a.tax_classification.value:<5} "
                  f"{a.hours:6.2f}h × ${a.rate:.2f} = ${a.amount:,.2f}  [{a.status.value}]")
    print(f"\n{'─' * 50}")
    print(f"{len(data.employees)} employees · {format_hours_minutes(data.total_hours)} · "
          f"${data.total_payroll:,.2f} · {data.paid_count} paid")
    if data.flagged_activity:
        print(f"⚠️  {len(data.flagged_activity)} shift(s) under 5 minutes")


if __name__ == "__main__":
    app()
