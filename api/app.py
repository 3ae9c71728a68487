# Path: api/app.py
# Purpose: Expose a FastAPI application for photo ingestion and search.
# Layer: api.
# Details: Streams ingestion progress as server-sent events and delegates queries to the search pipeline.

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from pydantic import BaseModel

from config import AppSettings, configure_logging
from core.errors import DimensionMismatchError, EmptyQueryError, EnumerationError, IngestionInProgressError
from core.models.domain import ProgressEvent, SearchQuery
from core.services import Services, build_services

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    """Body of a search request as sent by the client."""

    query: Optional[str] = None
    useSmartSearch: bool = False


def format_event(event: ProgressEvent) -> str:
    """Encode one progress event as a server-sent event frame."""

    return f"data: {json.dumps(event.to_payload())}\n\n"


def create_app(services: Optional[Services] = None, settings: Optional[AppSettings] = None):
    """Create a FastAPI app instance configured with the provided services."""

    from fastapi import FastAPI
    from fastapi.responses import JSONResponse, StreamingResponse
    from fastapi.staticfiles import StaticFiles

    if services is None:
        settings = settings or AppSettings.from_env()
        configure_logging(settings.log_level)
        services = build_services(settings)
    settings = services.settings

    app = FastAPI(title=settings.api_title, version="0.1.0")
    app.state.services = services

    def progress_frames() -> Iterator[str]:
        try:
            for event in services.index_builder.run():
                yield format_event(event)
        except IngestionInProgressError as exc:
            yield format_event(ProgressEvent(processed=0, total=0, error=True, message=str(exc)))

    @app.post("/api/process-embeddings")
    def process_embeddings():
        """Caption and embed every uploaded image, streaming progress as it happens."""

        if services.index_builder.running:
            return JSONResponse(status_code=409, content={"error": "Processing already in progress"})
        return StreamingResponse(
            progress_frames(),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    @app.post("/api/search")
    def search(payload: SearchRequest):
        """Run a search query using the configured pipeline."""

        query = SearchQuery.from_payload(payload.model_dump())
        try:
            response = services.search_pipeline.search(query)
        except EmptyQueryError as exc:
            return JSONResponse(status_code=400, content={"error": str(exc)})
        except DimensionMismatchError as exc:
            logger.error("Search rejected: %s", exc)
            return JSONResponse(status_code=409, content={"error": str(exc)})
        except EnumerationError as exc:
            logger.error("Search failed: %s", exc)
            return JSONResponse(status_code=500, content={"error": "Search failed"})
        return response.to_payload()

    @app.get("/api/photos")
    def photos():
        """List uploaded photos together with their indexing state."""

        try:
            images = services.scanner.scan()
        except EnumerationError as exc:
            logger.error("Error reading photos: %s", exc)
            return JSONResponse(status_code=500, content={"error": "Failed to read photos"})

        listing = []
        for image in images:
            entry = services.vector_store.get(image.id)
            listing.append(
                {
                    "filename": image.id,
                    "path": image.path,
                    "size": image.size,
                    "uploadDate": image.uploaded_at.isoformat(),
                    "hasEmbedding": entry is not None,
                    "description": entry.caption if entry is not None else None,
                }
            )
        return {"photos": listing, "smartSearchEnabled": not services.vector_store.is_empty()}

    @app.get("/api/status")
    def status() -> Dict[str, Any]:
        """Report whether smart search has anything to rank."""

        return {"ready": not services.vector_store.is_empty(), "size": services.vector_store.size()}

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        """Return a simple health status payload."""

        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "smartSearchReady": not services.vector_store.is_empty(),
            "photosProcessed": services.vector_store.size(),
        }

    upload_folder = settings.upload_folder
    upload_folder.mkdir(parents=True, exist_ok=True)
    app.mount(settings.public_prefix, StaticFiles(directory=str(upload_folder)), name="uploads")

    return app
