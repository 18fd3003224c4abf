"""FastAPI application factory."""
from __future__ import annotations
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel
from payrecon import __version__
from payrecon.logging import logger, get_run_id
from payrecon.domain.exceptions import (
    ConflictError, NotFoundError, PayrollLoadError, ValidationFailed,
)


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from payrecon.infra.db.engine import engine  # triggers pragmas + mapper registration
        from payrecon.infra.db.schema_compat import ensure_schema_compat
        SQLModel.metadata.create_all(engine)
        ensure_schema_compat(engine)
        logger.info("API ready (run %s, %s)", get_run_id(), engine.url.render_as_string(hide_password=True))
        yield

    app = FastAPI(
        title="Payroll Reconciliation API",
        version=__version__,
        lifespan=lifespan,
    )

    # Import routers inside create_app() to avoid circular imports at module load time
    from payrecon.api.routers.employees import router as employees_router
    from payrecon.api.routers.pay_rates import router as pay_rates_router
    from payrecon.api.routers.timeclock import router as timeclock_router
    from payrecon.api.routers.payroll import router as payroll_router
    from payrecon.api.routers.ledger import router as ledger_router

    app.include_router(employees_router)
    app.include_router(pay_rates_router)
    app.include_router(timeclock_router)
    app.include_router(payroll_router)
    app.include_router(ledger_router)

    @app.exception_handler(NotFoundError)
    def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(ConflictError)
    def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": exc.message})

    @app.exception_handler(ValidationFailed)
    def _invalid(request: Request, exc: ValidationFailed) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.message})

    @app.exception_handler(PayrollLoadError)
    def _load_failed(request: Request, exc: PayrollLoadError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": exc.message})

    @app.get("/health", tags=["ops"])
    def health() -> dict:
        return {"status": "ok"}

    return app
