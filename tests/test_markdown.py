from __future__ import annotations

from datetime import datetime, timezone

from news_curator.models import CategoryRef, PostRead, SourceRef
from news_curator.output.markdown import render_posts, write_digest


def test_write_digest_adds_date_suffix(tmp_path) -> None:
    target = write_digest("hello", tmp_path / "posts.md", datetime(2026, 2, 14).date())
    assert target.name == "posts-20260214.md"
    assert target.read_text(encoding="utf-8") == "hello"


def test_render_posts_lists_each_post() -> None:
    post = PostRead(
        id="p1",
        title="Hamilton Wins Thrilling Grand Prix",
        summary="A dramatic finish.",
        urls=["https://www.motorsport.com/f1/news/1"],
        category_id="c1",
        category=CategoryRef(id="c1", name="F1"),
        sources=[SourceRef(id="s1", name="Motorsport.com")],
        created_at=datetime(2026, 2, 14, 12, 0, tzinfo=timezone.utc),
    )
    text = render_posts([post], datetime(2026, 2, 15, tzinfo=timezone.utc))

    assert "- Posts: 1" in text
    assert "## Hamilton Wins Thrilling Grand Prix" in text
    assert "- Category: F1" in text
    assert "- Sources: Motorsport.com" in text
    assert "- https://www.motorsport.com/f1/news/1" in text


def test_render_posts_without_posts() -> None:
    text = render_posts([], datetime(2026, 2, 15, tzinfo=timezone.utc))
    assert "No posts yet" in text
