"""Storefront catalog API.

Wires the product and order routers, CORS, request logging, static assets
and the error handlers every route's exceptions funnel into.
"""
from contextlib import asynccontextmanager
from pathlib import Path
import logging
import os
import sys

from fastapi import FastAPI, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import database
from .exceptions import CatalogError, ValidationError
from .middleware import AllowAnyOriginMiddleware, RequestLoggingMiddleware
from .routes import products, orders

logger = logging.getLogger(__name__)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PUBLIC_DIR = Path(os.getenv("PUBLIC_DIR", Path(__file__).parent / "public"))
ALLOW_ANY_ORIGIN = {"Access-Control-Allow-Origin": "*"}


def setup_logging(level: str = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # request lines come from catalog.access instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    database.init_db()
    logger.info("Catalog API ready")
    yield


app = FastAPI(title="Storefront Catalog API", lifespan=lifespan)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AllowAnyOriginMiddleware)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error("%s %s: %s %s", request.method, request.url.path, exc.message, exc.context)
    else:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    body = {"error": exc.error_code, "message": exc.message}
    if isinstance(exc, ValidationError):
        body["details"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("%s %s: invalid request", request.method, request.url.path)
    fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "message": "Invalid request: " + ", ".join(fields),
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("%s %s: database error", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "database_error", "message": "Database operation failed"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("%s %s: unhandled error", request.method, request.url.path, exc_info=exc)
    # runs outside the middleware stack, so the origin header is set here
    return JSONResponse(status_code=500, content={"error": "internal_error", "message": "An unexpected error occurred"}, headers=ALLOW_ANY_ORIGIN)


@app.get("/", include_in_schema=False)
def handle_root():
    """Serve the landing page."""
    return FileResponse(PUBLIC_DIR / "index.html")


@app.get("/health", tags=["health"])
def health(db: Session = Depends(database.get_db)):
    database.ping(db)
    return {"status": "ok"}


app.include_router(products.router)
app.include_router(orders.router)
app.mount("/static", StaticFiles(directory=PUBLIC_DIR), name="static")
