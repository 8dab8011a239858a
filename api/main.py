import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from articles import router as articles_router
from comments import router as comments_router
from core import settings
from core.db import Database
from core.errors import ApiError
from topics import router as topics_router
from users import router as users_router

logger = logging.getLogger(__name__)

ENDPOINTS_FILE = Path(__file__).resolve().parent / "core" / "endpoints.json"


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # One store handle per process, shared by every request.
    app.state.db = await Database.connect()
    try:
        yield
    finally:
        await app.state.db.close()


app = FastAPI(lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(topics_router.router, prefix="/api", tags=["topics"])
app.include_router(articles_router.router, prefix="/api", tags=["articles"])
app.include_router(comments_router.router, prefix="/api", tags=["comments"])
app.include_router(users_router.router, prefix="/api", tags=["users"])


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.debug("api_error path=%s status=%s msg=%s", request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(status_code=exc.status_code, content={"msg": "Path not found"})
    return JSONResponse(status_code=exc.status_code, content={"msg": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"msg": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request_failed method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": "Internal server error"},
    )


@app.get("/api")
def get_endpoints() -> dict:
    return {"endpoints": json.loads(ENDPOINTS_FILE.read_text(encoding="utf-8"))}


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
