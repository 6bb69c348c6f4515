from __future__ import annotations

import logging
import os

import uvicorn
from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink.config import Settings, settings
from shortlink.logging_config import setup_logging
from shortlink.service import get_long_url_for_redirect, shorten_url
from shortlink.store import URLStore
from shortlink.ui import build_short_url, index_page, result_fragment

logger = logging.getLogger("shortlink.main")

PACKAGE_STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")


def resolve_static_dir(config: Settings) -> str | None:
    for candidate in (config.static_dir, PACKAGE_STATIC_DIR):
        if candidate and os.path.isdir(candidate):
            return candidate
    return None


def create_app(store: URLStore | None = None, config: Settings = settings) -> FastAPI:
    """
    Builds the application around one explicitly constructed store.
    Every request handled by this app shares that store.
    """
    app = FastAPI(title="URL Shortener", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.store = store if store is not None else URLStore()
    app.state.config = config

    @app.exception_handler(StarletteHTTPException)
    def plain_text_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    def index(request: Request) -> HTMLResponse:
        return index_page()

    @app.post("/shorten")
    def shorten(request: Request, url: str = Form("")) -> HTMLResponse:
        entry = shorten_url(request.app.state.store, url, request.app.state.config)
        host = request.headers.get("host", "")
        return result_fragment(build_short_url(host, entry.token), entry.token)

    def shorten_wrong_method(request: Request) -> None:
        raise HTTPException(status_code=405, detail="Method not allowed")

    def redirect(request: Request) -> RedirectResponse:
        token = request.path_params["token"]
        long_url = get_long_url_for_redirect(request.app.state.store, token)
        return RedirectResponse(url=long_url, status_code=302)

    # Plain Starlette routes with no method list match every method,
    # extension methods included. Order matters: POST /shorten first.
    app.add_route("/", index, include_in_schema=False)
    app.add_route("/shorten", shorten_wrong_method, include_in_schema=False)

    static_dir = resolve_static_dir(config)
    if static_dir is not None:
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    app.add_route("/{token}", redirect, include_in_schema=False)

    return app


def main() -> None:
    setup_logging(settings.log_level)
    app = create_app(URLStore(), settings)
    logger.info("Server starting on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
