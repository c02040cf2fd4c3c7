from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel


class ExtractionStage(str, Enum):
    DIRECT = "direct"
    FENCED_BLOCK = "fenced_block"
    BRACE_SPAN = "brace_span"
    STRIPPED_FENCE = "stripped_fence"


class LLMApiUsed(str, Enum):
    RESPONSES = "responses"
    CHAT_COMPLETIONS = "chat_completions"


class CurationResult(BaseModel):
    """Synthesized story pulled out of the agent's output.

    `headline` and `summary` must be non-empty strings and are kept as given.
    `urls` is supplementary: anything other than a list of strings is replaced
    by an empty list.
    """

    headline: StrictStr
    summary: StrictStr
    urls: list[str] = Field(default_factory=list)

    @field_validator("headline", "summary")
    @classmethod
    def require_text(cls, value: str) -> str:
        if not value:
            raise ValueError("must be a non-empty string")
        return value

    @field_validator("urls", mode="before")
    @classmethod
    def coerce_urls(cls, value: Any) -> list[str]:
        if isinstance(value, list) and all(isinstance(url, str) for url in value):
            return value
        return []


class _ReadModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=AliasGenerator(serialization_alias=to_camel),
        from_attributes=True,
    )


class SourceRef(_ReadModel):
    id: str
    name: str


class SourceRead(_ReadModel):
    id: str
    name: str
    url: str
    category_id: str
    category_name: str | None = None


class CategoryRef(_ReadModel):
    id: str
    name: str


class CategoryRead(_ReadModel):
    id: str
    name: str
    post_count: int = 0
    source_count: int = 0


class PostRead(_ReadModel):
    """A persisted curated post, as listed by the API and the digest."""

    id: str
    title: str
    summary: str
    urls: list[str] = Field(default_factory=list)
    category_id: str
    category: CategoryRef | None = None
    sources: list[SourceRef] = Field(default_factory=list)
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without an offset.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class CurateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    category_id: str | None = Field(default=None, alias="categoryId")
