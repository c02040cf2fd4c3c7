from __future__ import annotations

import json
from collections.abc import Sequence

from news_curator.models import SourceRead

PROMPT_VERSION = "1.0"

SYSTEM_TEMPLATE = """You are an expert news curator for {category}.
Your task is to synthesize a single, cohesive news story from the most important recent articles found at the following URLs: {source_urls}.

Follow these steps:
1. Visit each URL and identify the single most significant recent article from each source.
2. After reviewing all articles, create a single, compelling, and concise headline (max 20 words) that summarizes the overall news.
3. Write a short, engaging summary (3-4 sentences) that combines the key information from all articles into a single narrative.

IMPORTANT: Respond ONLY with a valid JSON object. Do not use markdown formatting, code blocks, or any other text. Your response must be parseable JSON in this exact format:
{schema}
"""

USER_TEMPLATE = "Synthesize the latest news from the provided sources for the {category} category."

RESULT_SCHEMA = {
    "headline": "Your generated headline",
    "summary": "Your generated summary",
    "urls": ["url_from_source_1", "url_from_source_2"],
}


def build_instructions(category_name: str, sources: Sequence[SourceRead]) -> str:
    source_urls = ", ".join(source.url for source in sources)
    schema_json = json.dumps(RESULT_SCHEMA, indent=2)
    return SYSTEM_TEMPLATE.format(
        category=category_name,
        source_urls=source_urls,
        schema=schema_json,
    )


def build_user_prompt(category_name: str) -> str:
    return USER_TEMPLATE.format(category=category_name)
