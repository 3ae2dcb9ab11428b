"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from account_service.api import api_router
from account_service.core.config import get_settings
from account_service.db.base import Base
from account_service.db.session import engine
from account_service.middleware.access_gate import AccessGateMiddleware

settings = get_settings()
logging.getLogger("account_service").setLevel(settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")
    try:
        yield
    finally:
        await engine.dispose()


app = FastAPI(title=settings.app_name, lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies are reported like any other rejected write.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": [
            {"field": ".".join(str(part) for part in error["loc"][1:]), "message": error["msg"]}
            for error in exc.errors()
        ]},
    )


app.add_middleware(AccessGateMiddleware)

# Added last so CORS preflight is answered before the gate.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


def run() -> None:
    """Console entrypoint serving the app with uvicorn."""
    import uvicorn

    uvicorn.run("account_service.main:app", host="0.0.0.0", port=8080, log_level=settings.log_level.lower())
