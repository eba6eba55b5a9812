import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.routes.expenses import router as expenses_router
from core.config import LOG_FILE, LOG_LEVEL
from core.errors import ExpenseAPIError, MalformedInput
from core.logging_config import configure_logging
from db.database import init_db

configure_logging(Path(LOG_FILE) if LOG_FILE else None, level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="expense-api", version="0.1")

@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("database initialised")


@app.exception_handler(ExpenseAPIError)
def handle_expense_api_error(request: Request, exc: ExpenseAPIError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError):
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    error = MalformedInput("; ".join(parts) or "Invalid request")
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


app.include_router(expenses_router)
