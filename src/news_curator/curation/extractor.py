"""Pull a `{headline, summary, urls}` object out of free-form agent output.

The agent is told to answer with bare JSON but sometimes wraps it in prose or
markdown fences. Stages run from strictest to most permissive and the first
candidate that validates wins. Nothing here raises for string input: a
failed extraction is reported as ``None``.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterator

from pydantic import ValidationError

from news_curator.models import CurationResult, ExtractionStage

logger = logging.getLogger(__name__)


JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
LEADING_FENCE_RE = re.compile(r"^```(?:json)?", re.IGNORECASE)
TRAILING_FENCE_RE = re.compile(r"```$")


def _direct(text: str) -> Iterator[str]:
    yield text


def _fenced_blocks(text: str) -> Iterator[str]:
    # Pair fences first so an unbalanced block cannot swallow the next one.
    for match in JSON_FENCE_RE.finditer(text):
        body = match.group(1)
        if body.startswith("{") and body.endswith("}"):
            yield body


def _brace_span(text: str) -> Iterator[str]:
    # Widest span: first "{" to last "}".
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last != -1 and first < last:
        yield text[first : last + 1]


def _stripped_fence(text: str) -> Iterator[str]:
    stripped = LEADING_FENCE_RE.sub("", text.strip(), count=1).strip()
    stripped = TRAILING_FENCE_RE.sub("", stripped, count=1).strip()
    if stripped.startswith("{") and stripped.endswith("}"):
        yield stripped


STAGES: tuple[tuple[ExtractionStage, Callable[[str], Iterator[str]]], ...] = (
    (ExtractionStage.DIRECT, _direct),
    (ExtractionStage.FENCED_BLOCK, _fenced_blocks),
    (ExtractionStage.BRACE_SPAN, _brace_span),
    (ExtractionStage.STRIPPED_FENCE, _stripped_fence),
)


def _parse_candidate(blob: str, stage: ExtractionStage) -> CurationResult | None:
    try:
        payload = json.loads(blob)
    except (json.JSONDecodeError, RecursionError) as exc:
        logger.debug("extraction stage %s: json_decode_error:%s", stage.value, exc)
        return None

    try:
        return CurationResult.model_validate(payload)
    except ValidationError as exc:
        logger.debug(
            "extraction stage %s: schema_validation_error:%s",
            stage.value,
            exc.errors(include_url=False, include_input=False),
        )
        return None


def extract_with_stage(text: str) -> tuple[CurationResult | None, ExtractionStage | None]:
    """Run the fallback chain and report which stage produced the result."""
    for stage, candidates in STAGES:
        found_candidate = False
        for blob in candidates(text):
            found_candidate = True
            result = _parse_candidate(blob, stage)
            if result is not None:
                logger.debug("extraction stage %s: accepted", stage.value)
                return result, stage
        if not found_candidate:
            logger.debug("extraction stage %s: no candidate", stage.value)

    logger.info("no curation result found in agent output (%d chars)", len(text))
    return None, None


def extract(text: str) -> CurationResult | None:
    result, _stage = extract_with_stage(text)
    return result
