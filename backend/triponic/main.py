import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from triponic.config import settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_LOG_DIR.mkdir(exist_ok=True)

_log_level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "triponic.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from triponic.dependencies import close_clients
from triponic.routers import conversations, flights, itineraries, preferences
from triponic.services.errors import DayCountMismatch, GenerationError, InvalidRequest, NotFound

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Triponic starting (llm={settings.llm_provider}, cache={settings.search_cache_backend})")
    yield
    await close_clients()
    logger.info("Outbound clients closed")


app = FastAPI(
    title="Triponic",
    description="AI-assisted trip planning and flight search",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidRequest)
async def invalid_request_handler(request: Request, exc: InvalidRequest):
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": exc.details})


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"error": "Not found", "details": exc.details})


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    logger.error(f"Generation failed on {request.url.path}: {exc.kind}: {exc.details}")
    content = {"error": "Failed to generate a response with AI", "details": exc.details, "kind": exc.kind}
    if isinstance(exc, DayCountMismatch):
        content["expected"] = exc.expected
        content["actual"] = exc.actual
    return JSONResponse(status_code=502, content=content)


app.include_router(flights.router, prefix="/api/flights", tags=["flights"])
app.include_router(itineraries.router, prefix="/api", tags=["itineraries"])
app.include_router(preferences.router, prefix="/api", tags=["preferences"])
app.include_router(conversations.router, prefix="/api/conversations", tags=["conversations"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "triponic"}
