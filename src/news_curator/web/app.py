from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from news_curator import __version__
from news_curator.config import Config
from news_curator.curation.agent import AgentClient
from news_curator.curation.errors import (
    CurationError,
    CurationTimeoutError,
    ExtractionFailedError,
    NoSourcesError,
)
from news_curator.curation.service import CurationService, NewsAgent
from news_curator.models import CurateRequest
from news_curator.storage.repository import CurationStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> CurationStore:
    return request.app.state.store


def get_service(request: Request) -> CurationService:
    return request.app.state.service


def _failure(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"message": message, "success": False}, status_code=status_code)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@router.get("/posts")
async def list_posts(store: CurationStore = Depends(get_store)) -> JSONResponse:
    try:
        posts = await asyncio.to_thread(store.list_posts)
    except Exception:  # noqa: BLE001
        logger.exception("error fetching posts")
        return JSONResponse(
            {"error": "Failed to fetch posts", "data": [], "success": False},
            status_code=500,
        )
    return JSONResponse(
        {"data": [post.model_dump(mode="json", by_alias=True) for post in posts], "success": True}
    )


@router.get("/categories")
async def list_categories(store: CurationStore = Depends(get_store)) -> JSONResponse:
    try:
        categories = await asyncio.to_thread(store.list_categories)
    except Exception:  # noqa: BLE001
        logger.exception("error fetching categories")
        return JSONResponse(
            {"error": "Failed to fetch categories", "data": [], "success": False},
            status_code=500,
        )
    return JSONResponse(
        {
            "data": [category.model_dump(mode="json", by_alias=True) for category in categories],
            "success": True,
        }
    )


@router.post("/curate")
async def curate(request: Request, service: CurationService = Depends(get_service)) -> JSONResponse:
    try:
        body: Any = await request.json()
        payload = CurateRequest.model_validate(body if isinstance(body, dict) else {})
    except (ValueError, ValidationError):
        return _failure("categoryId is required", 400)

    category_id = (payload.category_id or "").strip()
    if not category_id:
        return _failure("categoryId is required", 400)

    try:
        post = await service.curate(category_id)
    except NoSourcesError as exc:
        logger.info("%s", exc)
        return _failure(str(exc), 404)
    except CurationTimeoutError as exc:
        logger.warning("%s", exc)
        return _failure(str(exc), 504)
    except ExtractionFailedError as exc:
        return _failure(str(exc), 500)
    except CurationError as exc:
        logger.error("curation failed for category %s: %s", category_id, exc)
        return _failure(f"Curation failed: {exc}", 500)
    except Exception as exc:  # noqa: BLE001
        logger.exception("an error occurred during the curation process")
        return _failure(f"Curation failed: {exc}", 500)

    category_name = post.category.name if post.category else category_id
    return JSONResponse(
        {
            "message": f"Curation complete. Created 1 new synthesized post for {category_name}.",
            "post": post.model_dump(mode="json", by_alias=True),
            "success": True,
        }
    )


def create_app(
    config: Config | None = None,
    store: CurationStore | None = None,
    agent: NewsAgent | None = None,
) -> FastAPI:
    config = config or Config()
    store = store or CurationStore.from_config(config)
    if agent is None and config.api_key_value():
        agent = AgentClient(config)

    app = FastAPI(title="news-curator", version=__version__)
    app.state.config = config
    app.state.store = store
    app.state.service = CurationService(store, agent)
    app.include_router(router)
    return app
