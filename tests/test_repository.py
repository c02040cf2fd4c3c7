from __future__ import annotations

from datetime import datetime, timedelta, timezone

from news_curator.storage.orm import Post


def test_list_sources_for_category(store) -> None:
    f1 = store.create_category("F1")
    other = store.create_category("Football")
    store.add_source(f1.id, "Autosport", "https://www.autosport.com/f1")
    store.add_source(f1.id, "Motorsport.com", "https://www.motorsport.com/f1/")
    store.add_source(other.id, "Goal.com", "https://www.goal.com/en")

    sources = store.list_sources(f1.id)
    assert [source.name for source in sources] == ["Autosport", "Motorsport.com"]
    assert all(source.category_name == "F1" for source in sources)
    assert store.list_sources("missing") == []


def test_create_post_links_sources(store) -> None:
    category = store.create_category("F1")
    source = store.add_source(category.id, "Autosport", "https://www.autosport.com/f1")

    post = store.create_post(
        title="Headline",
        summary="Summary",
        urls=["https://a", "https://b"],
        category_id=category.id,
        source_ids=[source.id],
    )

    assert post.id
    assert post.created_at is not None
    assert post.urls == ["https://a", "https://b"]
    assert post.category is not None and post.category.name == "F1"
    assert [ref.name for ref in post.sources] == ["Autosport"]


def test_list_posts_newest_first(store) -> None:
    category = store.create_category("F1")
    now = datetime.now(tz=timezone.utc)
    with store.session_factory() as session, session.begin():
        session.add(Post(title="old", summary="s", urls=[], category_id=category.id, created_at=now - timedelta(hours=1)))
        session.add(Post(title="new", summary="s", urls=[], category_id=category.id, created_at=now))

    titles = [post.title for post in store.list_posts()]
    assert titles == ["new", "old"]


def test_list_categories_counts(store) -> None:
    f1 = store.create_category("F1")
    store.create_category("Football")
    source = store.add_source(f1.id, "Autosport", "https://www.autosport.com/f1")
    store.create_post("H", "S", [], f1.id, [source.id])

    categories = store.list_categories()
    assert [category.name for category in categories] == ["F1", "Football"]
    assert (categories[0].post_count, categories[0].source_count) == (1, 1)
    assert (categories[1].post_count, categories[1].source_count) == (0, 0)


def test_find_category_by_id_or_name(store) -> None:
    category = store.create_category("US Politics")
    assert store.find_category(category.id) == category
    assert store.find_category("us politics") == category
    assert store.find_category("Cooking") is None


def test_read_models_serialize_camel_case(store) -> None:
    category = store.create_category("F1")
    post = store.create_post("H", "S", ["u"], category.id, [])
    payload = post.model_dump(mode="json", by_alias=True)
    assert payload["categoryId"] == category.id
    assert "createdAt" in payload
    assert payload["category"] == {"id": category.id, "name": "F1"}


def test_created_at_keeps_utc_offset_after_reload(store) -> None:
    category = store.create_category("F1")
    created = store.create_post("H", "S", [], category.id, [])
    listed = store.list_posts()[0]

    assert created.created_at.tzinfo is not None
    assert listed.created_at.tzinfo is not None
    assert listed.created_at.utcoffset() == timedelta(0)
    assert listed.created_at == created.created_at
    assert listed.model_dump(mode="json", by_alias=True)["createdAt"].endswith(("Z", "+00:00"))
