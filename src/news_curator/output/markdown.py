from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from news_curator.models import PostRead


def _render_bullets(values: list[str]) -> list[str]:
    if not values:
        return ["- (none)"]
    return [f"- {value}" for value in values]


def render_posts(posts: list[PostRead], generated_at: datetime) -> str:
    lines: list[str] = []
    lines.append("# News Curator Digest")
    lines.append("")
    lines.append(f"- Generated: {generated_at.isoformat()}")
    lines.append(f"- Posts: {len(posts)}")
    lines.append("")

    if not posts:
        lines.append("No posts yet. Run `news-curator curate <category>` to create one.")
        lines.append("")
        return "\n".join(lines)

    for post in posts:
        lines.append(f"## {post.title}")
        lines.append(f"- Category: {post.category.name if post.category else post.category_id}")
        lines.append(f"- Created: {post.created_at.isoformat()}")
        if post.sources:
            lines.append(f"- Sources: {', '.join(source.name for source in post.sources)}")
        lines.append("")
        lines.append(post.summary)
        lines.append("")
        lines.append("Links:")
        lines.extend(_render_bullets(post.urls))
        lines.append("")

    return "\n".join(lines)


def write_digest(content: str, out_base: Path, run_date: date) -> Path:
    stem = out_base.stem
    suffix = out_base.suffix
    target = out_base.with_name(f"{stem}-{run_date.strftime('%Y%m%d')}{suffix}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target
