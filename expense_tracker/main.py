"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from expense_tracker.api import auth, expenses, system
from expense_tracker.config import get_settings
from expense_tracker.database import engine, init_db
from expense_tracker.exceptions import ExpenseTrackerError, StartupError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).resolve().parent.parent / "frontend"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the schema on startup and release the pool on shutdown."""
    try:
        init_db()
    except StartupError as e:
        # Keep serving; routes report store errors until the database is back
        logger.error(f"{e.message}. Starting in degraded mode")
    yield
    engine.dispose()
    logger.info("Database pool closed")


app = FastAPI(
    title="Expense Tracker API",
    description="Per-user expense tracking with category summaries",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ExpenseTrackerError)
async def expense_tracker_error_handler(request: Request, exc: ExpenseTrackerError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        problems.append(f"{location}: {error['msg']}" if location else error["msg"])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Invalid request. " + "; ".join(problems)},
    )


# Register routers
app.include_router(system.router)
app.include_router(auth.router)
app.include_router(expenses.router)

# Static client, mounted last so API routes take precedence
if FRONTEND_DIR.is_dir():
    app.mount("/", StaticFiles(directory=FRONTEND_DIR, html=True), name="frontend")
else:
    logger.warning(f"Frontend directory not found: {FRONTEND_DIR}; skipping static mount")


def run() -> None:
    """Run the API server with uvicorn."""
    uvicorn.run("expense_tracker.main:app", host="0.0.0.0", port=settings.port)  # noqa: S104


if __name__ == "__main__":
    run()
