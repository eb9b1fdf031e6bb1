"""
HTTP endpoint serving subtitle files as WebVTT for HTML video text tracks.

Run with `uvicorn --factory subtrack.api:create_default_app` or `subtrack serve`.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse, Response

from .config_loader import load_settings
from .exceptions import FetchError, InvalidSourceError
from .fetcher import build_fetcher
from .subtitle_service import VTT_CONTENT_TYPE, SubtitleService

logger = logging.getLogger(__name__)

def create_app(service: SubtitleService) -> FastAPI:
    """
    Builds the FastAPI application around a subtitle service.

    Args:
        service: The service used to load and convert subtitles.
    """
    app = FastAPI(title="SubTrack")
    app.state.subtitle_service = service

    @app.get("/health")
    def health():
        return {"status": "online", "service": "subtrack"}

    @app.get("/api/subtitles")
    def get_subtitles(url: Optional[str] = Query(default=None)):
        """Fetches a subtitle file and returns it as (RTL-marked) WebVTT."""
        if not url:
            return JSONResponse({"error": "Missing url"}, status_code=400)
        try:
            result = service.render(url)
        except InvalidSourceError:
            return JSONResponse({"error": "Invalid url"}, status_code=400)
        except FetchError as e:
            logger.error(f"Serving subtitles failed for {url}: {e}")
            return JSONResponse({"error": "Failed to load subtitles"}, status_code=500)

        headers = {k: v for k, v in result.headers.items() if k.lower() != "content-type"}
        return Response(content=result.body, media_type=VTT_CONTENT_TYPE, headers=headers)

    return app


def build_service(config: dict) -> SubtitleService:
    """Creates a SubtitleService from configuration settings."""
    return SubtitleService(
        fetcher=build_fetcher(config),
        cache_max_age=int(config.get('cache_max_age', 3600)),
    )


def create_default_app() -> FastAPI:
    """Application factory for uvicorn's `--factory` mode, reading SUBTRACK_CONFIG."""
    return create_app(build_service(load_settings()))
