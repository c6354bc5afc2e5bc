from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from config import load_settings, system_clock
from errors import ConfigurationError, UpstreamError
from logging_config import configure_logging, get_logger
from neows_client import NeoWsClient
from today_cache import TodayCache
from today_service import NeoTodayService

# Load configuration from environment / .env
settings = load_settings()
configure_logging(settings.log_level, settings.log_file)
logger = get_logger(__name__)

# Initialize FastAPI app
app = FastAPI(title="NASA NEO Today")

# ============================================================================
# CONFIGURE CORS
# ============================================================================
origins = [
    "http://localhost:5173",      # Vite default
    "http://localhost:3000",      # Create React App default
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# SERVICE WIRING (built once per process)
# ============================================================================
neows_client = NeoWsClient(
    base_url=settings.nasa_base_url,
    api_key=settings.nasa_api_key,
    timeout_seconds=settings.timeout_seconds,
)
today_cache = TodayCache(
    ttl_seconds=settings.cache_ttl_seconds,
    max_size=settings.cache_max_size,
)
today_service = NeoTodayService(
    fetcher=neows_client,
    cache=today_cache,
    zone=settings.timezone,
    clock=system_clock(settings.timezone),
)


def _get_today_service() -> NeoTodayService:
    return today_service


# ============================================================================
# NEO ENDPOINTS
# ============================================================================

@app.get("/api/neos/today")
def get_today_neos():
    """
    Today's near-Earth objects, ordered by close approach time
    Returns: JSON array of NEO summaries (unknown numbers are null)
    """
    try:
        summaries = _get_today_service().get_today_summaries()
        content = [summary.to_api_dict() for summary in summaries]
        return JSONResponse(content=content)
    except UpstreamError as e:
        logger.warning("NeoWs failure (status=%s): %s", e.status_code, e.body_snippet)
        return JSONResponse(
            status_code=502,
            content={
                "error": "NASA_NEO_WS_ERROR",
                "message": "NASA NeoWs request failed",
                "status": e.status_code,
            },
        )
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return JSONResponse(
            status_code=500,
            content={
                "error": "CONFIG_ERROR",
                "message": "NASA_API_KEY is not configured",
            },
        )
    except Exception:
        logger.exception("Unexpected error while serving today's NEOs")
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "Unexpected error",
            },
        )


# ============================================================================
# HEALTH CHECK / CONFIG
# ============================================================================

@app.get("/api/health")
def health():
    """Liveness only; does not touch NASA."""
    return {"status": "ok"}


@app.get("/api/config")
def get_config():
    return {"timezone": settings.timezone_id}


@app.get("/")
def root():
    """
    Root endpoint - service index
    """
    return {
        "status": "online",
        "api_name": "NASA NEO Today",
        "endpoints": {
            "neos": [
                "/api/neos/today"
            ],
            "service": [
                "/api/health",
                "/api/config"
            ]
        }
    }

# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True  # Enable hot reload for development
    )
