import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from signage import storage
from signage.errors import ArgumentError, InternalError
from signage.routes import router

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def create_app(data_dir: Path | None = None) -> FastAPI:
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    overrides = {}
    if os.getenv("QUEUE_NAME_MAX_LEN"):
        overrides["queue_name_max_len"] = os.environ["QUEUE_NAME_MAX_LEN"]
    storage.init_storage(resolved, **overrides)

    app = FastAPI(title="Signage")
    app.include_router(router, prefix="/api")

    @app.exception_handler(ArgumentError)
    async def argument_error(request: Request, exc: ArgumentError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(InternalError)
    async def internal_error(request: Request, exc: InternalError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
