from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import tzinfo
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

# ── local modules ───────────────────────────────────────────────────
from . import repository
from .config import ALLOW_ORIGINS, AUTO_MIGRATE, CAL_TIMEZONE, configure_logging
from .db import Base, engine, get_db
from .errors import CalendarError, MalformedRequestError, NotFoundError, ValidationError
from .schemas import Created, DbCheck, EventList, EventOut, Ok
from .timeutil import local_zone, month_range, parse_month, utcnow
from .validation import validate_event_id, validate_event_payload
# ────────────────────────────────────────────────────────────────────

configure_logging()
logger = logging.getLogger(__name__)

# ───────────────────────── DB migrations (optional) ─────────────────
from alembic import command
from alembic.config import Config

def run_migrations() -> None:
    app_dir = Path(__file__).resolve().parent
    cfg = Config(str(app_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(app_dir / "migrations"))
    cfg.attributes["configure_logger"] = False
    command.upgrade(cfg, "head")

@asynccontextmanager
async def lifespan(app: FastAPI):
    if AUTO_MIGRATE:
        logger.info("running migrations")
        run_migrations()
    else:
        Base.metadata.create_all(engine)
    yield

app = FastAPI(title="Calendar Events API", lifespan=lifespan)

# ───────────────────────── Error mapping ────────────────────────────
def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})

# Registered before CORSMiddleware so it sits inside it: the 500 response
# still gets CORS headers, and nothing reaches the server error handler.
@app.middleware("http")
async def catch_unexpected(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("%s %s failed", request.method, request.url.path)
        return _error("Internal Server Error", 500)

# ───────────────────────── CORS ─────────────────────────────────────
from fastapi.middleware.cors import CORSMiddleware

CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=CORS_METHODS.split(","),
    allow_headers=["Content-Type"],
    max_age=86400,
)

def _preflight_headers(request: Request) -> dict[str, str]:
    headers = {
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Max-Age": "86400",
    }
    origin = request.headers.get("origin")
    if "*" in ALLOW_ORIGINS:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin.rstrip("/") in ALLOW_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers

# Registered after CORSMiddleware so it wraps it: every OPTIONS gets 204.
@app.middleware("http")
async def answer_options(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=_preflight_headers(request))
    return await call_next(request)

@app.exception_handler(CalendarError)
async def calendar_error_handler(request: Request, exc: CalendarError):
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return _error(exc.message, exc.status_code)

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # unknown paths and unsupported methods are both "no such route"
    if exc.status_code in (404, 405):
        return _error("Not Found", 404)
    return _error(str(exc.detail), exc.status_code)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    if any(err.get("loc", ())[:1] == ("path",) for err in exc.errors()):
        return _error("invalid id", 400)
    return _error("invalid request", 400)

# ───────────────────────── Dependencies ─────────────────────────────
def get_local_zone() -> tzinfo:
    """Zone whose wall-clock months bound List queries."""
    return local_zone(CAL_TIMEZONE)

async def json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise MalformedRequestError("invalid JSON")

# ───────────────────────── Lifecycle & health ───────────────────────
@app.get("/api/health", response_model=Ok)
def health_check():
    return Ok()

@app.get("/api/dbcheck", response_model=DbCheck)
def dbcheck(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return DbCheck()

# ───────────────────────── Event CRUD ───────────────────────────────
@app.get("/api/events", response_model=EventList)
def list_events(
    month: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    zone: tzinfo = Depends(get_local_zone),
):
    ym = parse_month(month)
    bounds = month_range(*ym, zone) if ym else None
    if not bounds:
        raise ValidationError("month=YYYY-MM required")
    start, end = bounds
    rows = repository.list_starting_between(db, start, end)
    return EventList(events=[EventOut.model_validate(r) for r in rows])

@app.get("/api/events/{event_id}", response_model=EventOut)
def get_event(event_id: int, db: Session = Depends(get_db)):
    row = repository.get_event(db, validate_event_id(event_id))
    if not row:
        raise NotFoundError("event not found")
    return EventOut.model_validate(row)

@app.post("/api/events", response_model=Created)
def create_event(body: Any = Depends(json_body), db: Session = Depends(get_db)):
    payload = validate_event_payload(body)
    new_id = repository.insert_event(db, payload, utcnow())
    logger.info("created event %s", new_id)
    return Created(id=new_id)

@app.put("/api/events/{event_id}", response_model=Ok)
def update_event(event_id: int, body: Any = Depends(json_body), db: Session = Depends(get_db)):
    validate_event_id(event_id)
    payload = validate_event_payload(body)
    if repository.update_event(db, event_id, payload, utcnow()) == 0:
        raise NotFoundError("event not found")
    logger.info("updated event %s", event_id)
    return Ok()

@app.delete("/api/events/{event_id}", response_model=Ok)
def delete_event(event_id: int, db: Session = Depends(get_db)):
    validate_event_id(event_id)
    if repository.delete_event(db, event_id) == 0:
        raise NotFoundError("event not found")
    logger.info("deleted event %s", event_id)
    return Ok()

# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from .config import API_HOST, API_PORT

    uvicorn.run("calendar_app.main:app", host=API_HOST, port=API_PORT)
