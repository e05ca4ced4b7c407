from pathlib import Path

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from filestore.api.router import router as api_router
from filestore.api.schemas.files import HealthOut
from filestore.core.config import settings
from filestore.core.logging import configure_logging
from filestore.middleware.request_id import RequestIdMiddleware
from filestore.middleware.security_headers import SecurityHeadersMiddleware
from filestore.middleware.static_files import StoredObjectFiles
from filestore.storage.factory import get_storage

configure_logging()
logger = structlog.get_logger()

# Creates the storage root before StoredObjectFiles checks for it
get_storage()
storage_root = Path(settings.storage_root).resolve()

app = FastAPI(title="Filestore API")

# Starlette runs the LAST added middleware FIRST (outermost).
# Stored objects are innermost so headers and request ids still apply to them.
app.add_middleware(StoredObjectFiles, directory=storage_root)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIdMiddleware)

if settings.metrics_enabled:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": {"code": "INTERNAL_ERROR", "message": "internal server error"}},
    )


@app.get("/health", response_model=HealthOut)
def health():
    return HealthOut()


app.include_router(api_router)


def run() -> None:
    logger.info(
        "server_starting",
        host=settings.host,
        port=settings.port,
        storage_root=str(storage_root),
        upload_url=f"http://localhost:{settings.port}/upload",
        files_url=f"http://localhost:{settings.port}/files",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
