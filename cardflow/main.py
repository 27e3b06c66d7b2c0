import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from cardflow import errors
from cardflow.config import CORS_ORIGINS, ENVIRONMENT, LOG_LEVEL, is_production
from cardflow.database import engine
from cardflow.models import Base
from cardflow.routes_auth import router as auth_router
from cardflow.routes_cards import router as cards_router
from cardflow.routes_workspaces import router as workspaces_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database synchronized (%s)", engine.dialect.name)
    yield
    await engine.dispose()


app = FastAPI(
    title="CardFlow",
    description="Workspaces and freeform cards, scoped per user",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(workspaces_router)
app.include_router(cards_router)


# ── Error handlers ────────────────────────────────────
def _field_name(err: dict) -> str:
    loc = err["loc"]
    if err.get("type") == "json_invalid":
        return "body"
    if len(loc) < 2:
        return ".".join(str(p) for p in loc)
    # path parameters are declared snake_case; report them as the client names them
    if loc[0] == "path":
        return to_camel(str(loc[1]))
    # drop the "body" / "query" prefix
    return ".".join(str(p) for p in loc[1:])


def _error_message(err: dict) -> str:
    return err["msg"].removeprefix("Value error, ")


@app.exception_handler(errors.CardflowError)
async def cardflow_error_handler(request: Request, exc: errors.CardflowError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, errors.Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    exc = errors.ValidationError(
        [{"field": _field_name(err), "message": _error_message(err)} for err in exc.errors()]
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body = errors.InternalError().to_dict()
    body["error"] = "See server logs" if is_production() else str(exc)
    return JSONResponse(status_code=500, content=body)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "message": "CardFlow API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "env": ENVIRONMENT,
        "database": engine.dialect.name,
    }
