"""
Siege Stats - Main FastAPI Application
Player lookups are proxied live from r6data with a fresh/stale cache in front.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import Settings, settings as default_settings
from siegestats import operators as operator_catalog
from siegestats.cache import TTLCache
from siegestats.player_service import PlayerLookupService
from siegestats.r6data_client import R6DataClient
from siegestats.youtube_client import FeedUnavailableError, LatestVideoService, NoRelevantVideoError

# Version tracking
APP_VERSION = "v0.1.0"
APP_NAME = "Siege Stats"

logger = logging.getLogger("main")

router = APIRouter()


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_player_service(request: Request) -> PlayerLookupService:
    return request.app.state.player_service


def get_video_service(request: Request) -> LatestVideoService:
    return request.app.state.video_service


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


# =============================================================================
# ROUTES
# =============================================================================

@router.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"ok": True}


@router.get("/version")
def version_info():
    """Version information endpoint."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "full": f"{APP_NAME} {APP_VERSION}",
    }


@router.get("/cache/stats")
def cache_stats(cache: TTLCache = Depends(get_cache)):
    """Get cache statistics."""
    return cache.get_stats()


@router.get("/api/youtube/latest-r6")
def latest_siege_video(service: LatestVideoService = Depends(get_video_service)):
    """
    Latest Rainbow Six Siege upload on the Ubisoft channel.

    No mock fallback here: upstream failures surface as error statuses.
    """
    try:
        return service.latest()
    except NoRelevantVideoError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})
    except FeedUnavailableError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "Could not fetch the YouTube feed", "status": e.status_code},
        )
    except Exception as e:
        logger.exception(f"Latest video lookup failed: {e}")
        return JSONResponse(status_code=500, content={"error": "Server error", "details": str(e)})


@router.get("/api/player/{platform}/{name}")
def player_lookup(
    platform: str,
    name: str,
    nocache: Optional[str] = Query(None, description="Set to 1 to skip the fresh cache"),
    service: PlayerLookupService = Depends(get_player_service),
):
    """
    Player profile lookup.

    Always answers 200: live data, a cached copy, or a mock profile,
    with "cached", "mock", "source" and "debug" describing which.
    """
    return service.lookup(platform, name, nocache=nocache == "1")


@router.get("/api/operators")
def list_operators():
    """Full static operator catalog."""
    return operator_catalog.catalog_summary()


@router.get("/api/operators/{slug}")
def get_operator(slug: str):
    """Single operator by slug."""
    operator = operator_catalog.get_operator(slug)
    if operator is None:
        return JSONResponse(status_code=404, content={"error": "Operator not found"})
    return {"mock": True, "data": operator}


# =============================================================================
# APP FACTORY
# =============================================================================

def create_app(
    cfg: Optional[Settings] = None,
    cache: Optional[TTLCache] = None,
    stats_client: Optional[R6DataClient] = None,
    video_service: Optional[LatestVideoService] = None,
) -> FastAPI:
    """
    Build the application with its own cache and upstream clients.

    Every argument is optional; tests pass fakes or fresh instances.
    """
    cfg = cfg or default_settings
    cache = cache if cache is not None else TTLCache(default_ttl_seconds=cfg.default_cache_ttl_seconds)

    application = FastAPI(
        title=APP_NAME,
        description="Rainbow Six Siege player stats lookup backed by r6data",
        version=APP_VERSION,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.cache = cache
    application.state.player_service = PlayerLookupService(
        cache=cache,
        client=stats_client or R6DataClient(cfg=cfg),
        cfg=cfg,
    )
    application.state.video_service = video_service or LatestVideoService(cache=cache, cfg=cfg)

    application.include_router(router)
    return application


logging.basicConfig(level=default_settings.log_level)

app = create_app()
