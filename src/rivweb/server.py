"""Local preview server for the generated site."""

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

logger = logging.getLogger(__name__)


def create_app(directory: Path, index: str | None = None, title: str = "rivweb") -> FastAPI:
    """Create an app serving ``directory`` as static files.

    Args:
        directory: The generated site.
        index: Output filename of the home page. ``/`` redirects to it,
               since StaticFiles only knows about ``index.html``.
        title: Application title.
    """
    app = FastAPI(title=title, docs_url=None, redoc_url=None, openapi_url=None)

    if index:

        @app.get("/", include_in_schema=False)
        async def home():
            return RedirectResponse(url=f"/{index}", status_code=302)

    app.mount("/", StaticFiles(directory=str(directory), html=True), name="site")
    return app


def serve(directory: Path, host: str, port: int, index: str | None = None) -> None:
    """Serve ``directory`` until interrupted."""
    logger.info("starting server at http://%s:%d", host, port)
    uvicorn.run(create_app(directory, index), host=host, port=port)
