from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from news_curator.curation.errors import AgentError, ExtractionFailedError, NoSourcesError
from news_curator.curation.extractor import extract_with_stage
from news_curator.curation.prompts import build_instructions, build_user_prompt
from news_curator.models import PostRead
from news_curator.storage.repository import CurationStore

logger = logging.getLogger(__name__)


class NewsAgent(Protocol):
    async def run(self, instructions: str, prompt: str) -> str: ...


class CurationService:
    """One curation run: category sources -> agent -> extractor -> new post."""

    def __init__(self, store: CurationStore, agent: NewsAgent | None) -> None:
        self.store = store
        self.agent = agent

    async def curate(self, category_id: str) -> PostRead:
        logger.info("starting curation for category %s", category_id)
        sources = await asyncio.to_thread(self.store.list_sources, category_id)
        if not sources:
            raise NoSourcesError(category_id)

        category_name = sources[0].category_name or category_id
        logger.info("found %d sources for category %s", len(sources), category_name)

        if self.agent is None:
            raise AgentError("missing_api_key")

        raw_output = await self.agent.run(
            build_instructions(category_name, sources),
            build_user_prompt(category_name),
        )
        logger.debug("raw agent output for %s: %s", category_name, raw_output)

        result, stage = extract_with_stage(raw_output)
        if result is None:
            logger.warning("curation failed for %s: no valid result in agent output", category_name)
            raise ExtractionFailedError(category_name)

        logger.info(
            "curated story for %s via %s stage (%d urls)",
            category_name,
            stage.value if stage else "unknown",
            len(result.urls),
        )
        post = await asyncio.to_thread(
            self.store.create_post,
            result.headline,
            result.summary,
            result.urls,
            category_id,
            [source.id for source in sources],
        )
        logger.info("created post %s for %s", post.id, category_name)
        return post
