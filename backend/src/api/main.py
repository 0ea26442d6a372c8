# Standard library
import time
from typing import Optional

# Third-party libraries
import psutil
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Local application imports
from backend.src.api.events_api import router as events_router
from backend.src.api.files_api import router as files_router
from backend.src.core.config import UPLOAD_DIR
from backend.src.core.file_store import FileStore
from backend.src.core.logger import get_logger
from backend.src.core.notifier import FileLifecycleNotifier

logger = get_logger(__name__)


async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as a plain-text reason instead of a JSON body."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


def create_app(upload_dir: Optional[str] = None, notifier: Optional[FileLifecycleNotifier] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        upload_dir: Directory for stored uploads (defaults to UPLOAD_DIR)
        notifier: Shared lifecycle notifier (a new one is created if omitted)
    """
    app = FastAPI(title="CSV Explorer API")
    app.state.file_store = FileStore(upload_dir or UPLOAD_DIR)
    app.state.notifier = notifier or FileLifecycleNotifier()
    logger.info(f"Using UPLOAD_DIR: {app.state.file_store.upload_dir}")

    app.add_exception_handler(StarletteHTTPException, plain_text_http_error)
    app.include_router(files_router)
    app.include_router(events_router)

    @app.get("/")
    def home():
        return {"message": "Welcome to the CSV Explorer API!"}

    @app.get("/health")
    def health_check():
        """Lightweight health endpoint used by frontend to verify API connectivity."""
        try:
            mem = psutil.virtual_memory()
        except (OSError, RuntimeError) as e:
            logger.error(f"Health check failed: {str(e)}")
            raise HTTPException(500, "Health check failed")
        return {
            "status": "ok",
            "memory_percent": mem.percent,
            "uptime": time.time()
        }

    return app


app = create_app()
