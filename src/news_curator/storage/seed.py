from __future__ import annotations

import logging

from pydantic import BaseModel

from news_curator.storage.repository import CurationStore

logger = logging.getLogger(__name__)


class SeedPost(BaseModel):
    title: str
    summary: str
    urls: list[str]


class SeedCategory(BaseModel):
    name: str
    sources: list[tuple[str, str]]
    post: SeedPost


SEED_DATA = [
    SeedCategory(
        name="F1",
        sources=[
            ("Motorsport.com", "https://www.motorsport.com/f1/"),
            ("Autosport", "https://www.autosport.com/f1"),
        ],
        post=SeedPost(
            title="Hamilton Wins Thrilling Grand Prix",
            summary=(
                "In a stunning display of skill, Lewis Hamilton clinched victory at the final lap, "
                "overtaking his rival in a dramatic finish."
            ),
            urls=["https://www.motorsport.com/f1/news/hamilton-wins-thriller/1055123"],
        ),
    ),
    SeedCategory(
        name="US Politics",
        sources=[
            ("CNN Politics", "https://www.cnn.com/politics"),
            ("Fox News Politics", "https://www.foxnews.com/politics"),
        ],
        post=SeedPost(
            title="New Bill Passes Senate Floor",
            summary=(
                "A landmark infrastructure bill passed the Senate today with bipartisan support, "
                "promising significant investment in national projects."
            ),
            urls=["https://www.cnn.com/2024/11/05/politics/senate-infrastructure-bill/index.html"],
        ),
    ),
    SeedCategory(
        name="Football",
        sources=[
            ("ESPN FC", "https://www.espn.com/soccer/"),
            ("Goal.com", "https://www.goal.com/en"),
        ],
        post=SeedPost(
            title="Real Madrid Signs Star Forward",
            summary=(
                "In a blockbuster transfer, Real Madrid has officially announced the signing of "
                "star forward Kylian Mbappé on a five-year deal."
            ),
            urls=["https://www.espn.com/soccer/story/_/id/39478493/real-madrid-signs-kylian-mbappe"],
        ),
    ),
]


def seed(store: CurationStore, reset: bool = False) -> int:
    """Create the demo categories, sources and one example post each.

    Categories that already exist are left alone. Returns the number of
    categories created.
    """
    if reset:
        store.clear()
        logger.info("cleared previous data")

    created = 0
    for entry in SEED_DATA:
        if store.find_category(entry.name) is not None:
            logger.info("category %s already exists, skipping", entry.name)
            continue

        category = store.create_category(entry.name)
        source_ids = [store.add_source(category.id, name, url).id for name, url in entry.sources]
        store.create_post(
            title=entry.post.title,
            summary=entry.post.summary,
            urls=entry.post.urls,
            category_id=category.id,
            source_ids=source_ids[:1],
        )
        created += 1
        logger.info("seeded category %s with %d sources", entry.name, len(source_ids))
    return created
