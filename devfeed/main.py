"""
DevFeed - Main FastAPI Application
Hackathons, tech news and contests served through per-resource caches,
plus a per-user notes store
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from config.settings import Settings, settings as default_settings
from devfeed.cache import ResourceKind
from devfeed.context import FeedContext, build_feed_context
from devfeed.db import create_db_engine, init_db, make_session_factory
from devfeed.notes import router as notes_router

APP_VERSION = "v1.0.0"
APP_NAME = "DevFeed"

logger = logging.getLogger("devfeed.main")

# Fixed error bodies returned when a refresh fails
FEED_ERRORS = {
    ResourceKind.HACKATHONS: {"error": "Failed to fetch hackathons"},
    ResourceKind.NEWS: {"message": "Error scraping website"},
    ResourceKind.CONTESTS: {"message": "Error scraping website"},
}


def _serve_feed(request: Request, kind: ResourceKind):
    """Read a resource through its coordinator, mapping failures to a 500."""
    feeds: FeedContext = request.app.state.feeds
    try:
        return feeds.get(kind)
    except Exception as e:
        logger.error(f"Error fetching {kind.value}: {e}")
        return JSONResponse(status_code=500, content=FEED_ERRORS[kind])


def create_app(
    settings: Optional[Settings] = None,
    feeds: Optional[FeedContext] = None,
    session_factory: Optional[sessionmaker] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration (defaults to the environment-loaded settings)
        feeds: Cache slots and adapters (defaults to real upstreams, empty slots)
        session_factory: Notes database sessions (defaults to settings.database_url)
    """
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title=APP_NAME,
        description="Hackathons, tech news and contests with a notes store",
        version=APP_VERSION,
    )

    if session_factory is None:
        engine = create_db_engine(settings.database_url)
        session_factory = make_session_factory(engine)

        @app.on_event("startup")
        def _create_tables() -> None:
            init_db(engine)

    app.state.settings = settings
    app.state.feeds = feeds or build_feed_context(settings)
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check():
        """Liveness probe; never touches the caches."""
        return {"status": "healthy"}

    @app.get("/cache/stats")
    def cache_stats(request: Request):
        """Slot state and hit/miss counters per resource."""
        return request.app.state.feeds.get_stats()

    @app.get("/api/hackathons")
    def api_hackathons(request: Request):
        """Online hackathons that are open or upcoming (cached 1 hour)."""
        return _serve_feed(request, ResourceKind.HACKATHONS)

    @app.get("/api/news")
    def api_news(request: Request):
        """Latest tech news articles (cached 10 minutes)."""
        return _serve_feed(request, ResourceKind.NEWS)

    @app.get("/api/contests")
    def api_contests(request: Request):
        """Upcoming programming contests (cached 1 hour)."""
        return _serve_feed(request, ResourceKind.CONTESTS)

    app.include_router(notes_router)

    return app


app = create_app()
