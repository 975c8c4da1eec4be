"""
ScriptMaster Backend API
FastAPI application exposing the script engine over HTTP

This is the main entry point that wires together logging, routes and the
core error mapping.
"""

import uuid
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    LOG_LEVEL,
    LOG_FILE,
    JSON_LOGS,
)
from .core import (
    ErrorKind,
    ScriptMasterError,
    setup_logging,
    get_logger,
    set_request_id,
    clear_context,
)
from .routes import projects_router

setup_logging(
    level=LOG_LEVEL,
    log_file=Path(LOG_FILE) if LOG_FILE else None,
    use_json=JSON_LOGS,
)

logger = get_logger(__name__, service="api")
logger.info("Starting ScriptMaster API", extra={"log_level": LOG_LEVEL, "json_logs": JSON_LOGS})

ERROR_STATUS_CODES = {
    ErrorKind.TEMPLATE_MISSING: 404,
    ErrorKind.LAST_TEMPLATE: 409,
    ErrorKind.INVALID_DOCUMENT: 422,
    ErrorKind.EMPTY_PROJECT: 422,
    ErrorKind.RESERVED_COLUMN_NAME: 400,
}

app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Request-ID"],
)


@app.middleware("http")
async def add_request_correlation(request: Request, call_next):
    """Attach a correlation ID to every request and its log lines."""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    set_request_id(request_id)
    logger.info(f"{request.method} {request.url.path}", extra={
        "method": request.method,
        "path": request.url.path,
    })
    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        clear_context()


@app.exception_handler(ScriptMasterError)
async def handle_core_error(request: Request, exc: ScriptMasterError):
    status_code = ERROR_STATUS_CODES.get(exc.kind, 400)
    logger.warning("Request rejected", extra={
        "path": request.url.path,
        "kind": exc.kind.value,
        "error": exc.message,
    })
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.get("/")
async def root():
    return {"name": API_TITLE, "version": API_VERSION}


@app.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(projects_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
