"""
Main API module for shortlinks.

Responsibilities:
    - Redirect short codes to their target URLs, counting clicks
    - Expose a JSON API to create, list, inspect and delete links
    - Serve the dashboard and per-code stats pages
    - Provide a liveness probe

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - The storage backend (and its connection pool) is built once, opened in
      the app lifespan and closed on shutdown.
    - LinkRegistry owns the link rules; routes only translate HTTP to registry
      calls and registry errors to status codes.
"""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from shortlinks.config import settings
from shortlinks.errors import LinkError, StoreError
from shortlinks.registry.link_registry import LinkRegistry
from shortlinks.schemas import Link, LinkCreate
from shortlinks.storage.storage_factory import get_storage

STATIC_DIR = Path(__file__).parent / "shortlinks" / "static"

log = logging.getLogger("shortlinks")


def create_app(registry: Optional[LinkRegistry] = None) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        registry (Optional[LinkRegistry]): Pre-built registry. When omitted, a
            registry over the configured storage backend is created.

    Returns:
        FastAPI: A fully configured application instance.
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=settings.LOG_LEVEL,
            format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        )

    if registry is None:
        registry = LinkRegistry(storage=get_storage())
    storage = registry.storage
    log.info("Link storage backend: %s", type(storage).__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        storage.open()
        yield
        storage.close()

    app = FastAPI(
        title="shortlinks",
        description="URL shortener with click counts and last-click timestamps",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.started_at = time.monotonic()

    # ----------------------------------------------------------------
    # Error translation
    # ----------------------------------------------------------------
    @app.exception_handler(LinkError)
    async def link_error_handler(request: Request, exc: LinkError) -> JSONResponse:
        if isinstance(exc, StoreError):
            log.error(
                "Store failure during %s %s",
                request.method,
                request.url.path,
                exc_info=exc.__cause__ or exc,
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request body."})

    # ----------------------------------------------------------------
    # Service routes
    # ----------------------------------------------------------------
    @app.get("/healthz")
    def healthz():
        return {
            "ok": True,
            "version": settings.VERSION,
            "uptime": time.monotonic() - app.state.started_at,
        }

    # ----------------------------------------------------------------
    # JSON API
    # ----------------------------------------------------------------
    @app.post("/api/links", status_code=201, response_model=Link)
    def create_link(req: LinkCreate) -> Link:
        """
        Create a link; `short_code` is optional and generated when omitted.

        400 on a missing target URL or malformed code, 409 when the code is
        taken.
        """
        return registry.create_link(req.target_url, req.short_code)

    @app.get("/api/links", response_model=List[Link])
    def list_links() -> List[Link]:
        return registry.list_links()

    @app.get("/api/links/{code}", response_model=Link)
    def link_stats(code: str) -> Link:
        """Read-only stats for one code; does not count as a click."""
        return registry.get_link(code)

    @app.delete("/api/links/{code}", status_code=204)
    def delete_link(code: str) -> Response:
        registry.delete_link(code)
        return Response(status_code=204)

    # ----------------------------------------------------------------
    # Pages
    # ----------------------------------------------------------------
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.get("/", include_in_schema=False)
    def dashboard_page():
        return FileResponse(STATIC_DIR / "index.html")

    @app.get("/code/{code}", include_in_schema=False)
    def stats_page(code: str):
        # The page fetches /api/links/{code} itself.
        return FileResponse(STATIC_DIR / "stats.html")

    # Catch-all short path; must stay registered after the fixed routes.
    @app.get("/{code}")
    def redirect_link(code: str) -> RedirectResponse:
        """Redirect to the target URL and record the click (302)."""
        return RedirectResponse(url=registry.redirect(code), status_code=302)

    return app


# `uvicorn main:app` and `from main import app` continue to work.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
