from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session, selectinload, sessionmaker

from news_curator.config import Config
from news_curator.models import CategoryRead, CategoryRef, PostRead, SourceRead
from news_curator.storage.database import init_schema, make_engine, make_session_factory
from news_curator.storage.orm import Category, Post, Source, post_sources


class CurationStore:
    """Categories, their sources and the curated posts, behind one session factory."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    @classmethod
    def from_config(cls, config: Config) -> CurationStore:
        engine = make_engine(config.database_url)
        init_schema(engine)
        return cls(make_session_factory(engine))

    def list_categories(self) -> list[CategoryRead]:
        post_count = (
            select(func.count(Post.id))
            .where(Post.category_id == Category.id)
            .correlate(Category)
            .scalar_subquery()
        )
        source_count = (
            select(func.count(Source.id))
            .where(Source.category_id == Category.id)
            .correlate(Category)
            .scalar_subquery()
        )
        stmt = select(Category.id, Category.name, post_count, source_count).order_by(Category.name)
        with self.session_factory() as session:
            rows = session.execute(stmt).all()
        return [
            CategoryRead(id=row[0], name=row[1], post_count=row[2], source_count=row[3])
            for row in rows
        ]

    def find_category(self, key: str) -> CategoryRef | None:
        """Look a category up by id, falling back to a case-insensitive name match."""
        stmt = select(Category).where(
            or_(Category.id == key, func.lower(Category.name) == key.strip().lower())
        )
        with self.session_factory() as session:
            categories = session.scalars(stmt).all()
        if not categories:
            return None
        by_id = [category for category in categories if category.id == key]
        return CategoryRef.model_validate(by_id[0] if by_id else categories[0])

    def list_sources(self, category_id: str) -> list[SourceRead]:
        stmt = (
            select(Source)
            .where(Source.category_id == category_id)
            .options(selectinload(Source.category))
            .order_by(Source.name, Source.id)
        )
        with self.session_factory() as session:
            sources = session.scalars(stmt).all()
            return [
                SourceRead(
                    id=source.id,
                    name=source.name,
                    url=source.url,
                    category_id=source.category_id,
                    category_name=source.category.name,
                )
                for source in sources
            ]

    def list_posts(self) -> list[PostRead]:
        stmt = (
            select(Post)
            .options(selectinload(Post.category), selectinload(Post.sources))
            .order_by(Post.created_at.desc(), Post.id)
        )
        with self.session_factory() as session:
            return [PostRead.model_validate(post) for post in session.scalars(stmt).all()]

    def create_post(
        self,
        title: str,
        summary: str,
        urls: Sequence[str],
        category_id: str,
        source_ids: Sequence[str],
    ) -> PostRead:
        with self.session_factory() as session, session.begin():
            sources = []
            if source_ids:
                sources = list(session.scalars(select(Source).where(Source.id.in_(source_ids))).all())
            post = Post(
                title=title,
                summary=summary,
                urls=list(urls),
                category_id=category_id,
                sources=sources,
            )
            session.add(post)
            session.flush()
            session.refresh(post, attribute_names=["category", "sources"])
            return PostRead.model_validate(post)

    def create_category(self, name: str) -> CategoryRef:
        with self.session_factory() as session, session.begin():
            category = Category(name=name)
            session.add(category)
            session.flush()
            return CategoryRef.model_validate(category)

    def add_source(self, category_id: str, name: str, url: str) -> SourceRead:
        with self.session_factory() as session, session.begin():
            source = Source(name=name, url=url, category_id=category_id)
            session.add(source)
            session.flush()
            session.refresh(source, attribute_names=["category"])
            return SourceRead(
                id=source.id,
                name=source.name,
                url=source.url,
                category_id=source.category_id,
                category_name=source.category.name,
            )

    def clear(self) -> None:
        with self.session_factory() as session, session.begin():
            session.execute(delete(post_sources))
            session.execute(delete(Post))
            session.execute(delete(Source))
            session.execute(delete(Category))
