import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from protogen import __version__
from protogen.core.config import settings
from protogen.core.errors import ApiError
from protogen.core.logging import configure_logging
from protogen.generators.prototype.json_server import stop_json_servers
from protogen.api.routes import router as api_router
from protogen.llm.client import get_llm_client
from protogen.schemas.base import ErrorResponse

configure_logging()
log = logging.getLogger(__name__)


def error_response(message: str, status_code: int, code: str, exc: Exception) -> JSONResponse:
    body = {"message": message, "code": code}
    if settings.app_env == "development":
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content={"success": False, "error": body})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    log.info("Starting API server...")
    settings.public_path.mkdir(parents=True, exist_ok=True)
    if settings.check_model_on_startup:
        try:
            model = await get_llm_client().check_model()
        except Exception as e:
            log.error("API startup failed: %s", e)
            raise
        log.info("Using model %s", model)
    log.info("API server startup complete, docs at http://localhost:%s/api-docs", settings.api_port)
    yield
    log.info("Shutting down API server...")
    stop_json_servers()


app = FastAPI(
    title=settings.app_name,
    description="Generate JDL, mock data and HTML prototypes with a local LLM",
    version=__version__,
    docs_url="/api-docs",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.message, exc.status_code, exc.code, exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return error_response(", ".join(messages), 400, "VALIDATION_ERROR", exc)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(str(exc) or "Internal Server Error", 500, "INTERNAL_SERVER_ERROR", exc)


app.mount("/public", StaticFiles(directory=settings.public_dir, check_dir=False), name="public")
app.include_router(
    api_router,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
