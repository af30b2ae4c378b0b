"""FastAPI application entrypoint. No business logic; only wiring, lifecycle and error pages."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from clubhouse.api import router
from clubhouse.core.database import engine, init_db
from clubhouse.core.templating import STATIC_DIR, render

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect and create tables at startup; release the connection pool at shutdown."""
    logger.info("Starting clubhouse")
    init_db()
    yield
    logger.info("Shutting down clubhouse")
    engine.dispose()


app = FastAPI(
    title="Clubhouse",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(router)


@app.exception_handler(StarletteHTTPException)
async def html_error_pages(request: Request, exc: StarletteHTTPException):
    """Render 404 and 403 as HTML pages; every other status uses FastAPI's default handler.

    A known path requested with the wrong method is unmatched too, so it gets the 404 page.
    """
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return render(request, "not_found.html", status_code=status.HTTP_404_NOT_FOUND)
    if exc.status_code == status.HTTP_403_FORBIDDEN:
        return render(request, "forbidden.html", status_code=exc.status_code)
    return await http_exception_handler(request, exc)
