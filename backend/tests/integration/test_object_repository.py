"""Integration tests for the SQLAlchemy ObjectService and default record cloning."""

from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy import Integer, String, Uuid, column, func, select
from sqlalchemy.exc import IntegrityError

from app.application.services import CloneService
from app.infrastructure.database import ObjectRegistry
from app.infrastructure.database.repositories import SQLAlchemyObjectService
from app.infrastructure.database.repositories.object_repository import coerce_record_id
from app.infrastructure.events import InProcessEventDispatcher
from tests.integration.support.object_models import (
    ArticleModel,
    CategoryModel,
    CommentModel,
    CounterModel,
    SampleBase,
    TagModel,
    create_memory_database,
)


@pytest_asyncio.fixture
async def session():
    engine, factory = await create_memory_database(SampleBase)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def article(session) -> ArticleModel:
    category = CategoryModel(label="News")
    tags = [TagModel(label="python"), TagModel(label="sql")]
    article = ArticleModel(
        title="Original",
        slug="original",
        code="A-1",
        body="Body text",
        internal_notes="do not copy",
        category=category,
        tags=tags,
        comments=[CommentModel(text="first!")],
    )
    session.add(article)
    await session.flush()
    return article


@pytest.fixture
def objects(session) -> SQLAlchemyObjectService:
    return SQLAlchemyObjectService(session, ObjectRegistry.from_base(SampleBase))


# ── ObjectService ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_select_data_returns_recordset(objects, article):
    rows = await objects.select_data("article", article.id)
    assert len(rows) == 1
    assert rows[0]["title"] == "Original"
    assert rows[0]["category_id"] == article.category_id
    assert "headline" not in rows[0]

    assert await objects.select_data("article", "missing") == []


@pytest.mark.asyncio
async def test_select_data_converts_path_ids_for_integer_keys(objects, session):
    counter = CounterModel(label="visits")
    session.add(counter)
    await session.flush()

    [row] = await objects.select_data("counter", str(counter.id))
    assert row["id"] == counter.id
    assert row["label"] == "visits"


@pytest.mark.asyncio
@pytest.mark.parametrize("record_id", ["abc", "1.5", "中"])
async def test_select_data_with_unconvertible_id_finds_nothing(objects, record_id):
    assert await objects.select_data("counter", record_id) == []


@pytest.mark.parametrize(
    "sql_type, record_id, expected",
    [
        (Integer(), "42", 42),
        (Integer(), 42, 42),
        (String(36), "abc", "abc"),
        (String(36), 7, "7"),
        (
            Uuid(),
            "12345678-1234-5678-1234-567812345678",
            UUID("12345678-1234-5678-1234-567812345678"),
        ),
    ],
)
def test_coerce_record_id(sql_type, record_id, expected):
    assert coerce_record_id(column("id", sql_type), record_id) == expected


@pytest.mark.parametrize("sql_type, record_id", [(Integer(), "abc"), (Uuid(), "not-a-uuid")])
def test_coerce_record_id_rejects_invalid_values(sql_type, record_id):
    with pytest.raises(ValueError):
        coerce_record_id(column("id", sql_type), record_id)


@pytest.mark.asyncio
async def test_insert_data_generates_id_and_ignores_unknown_keys(objects):
    new_id = await objects.insert_data("category", {"label": "Sport", "not_a_column": 1})

    rows = await objects.select_data("category", new_id)
    assert rows[0]["label"] == "Sport"
    assert rows[0]["datecreated"] is not None


@pytest.mark.asyncio
async def test_insert_data_links_many_to_many(objects, article):
    tag_ids = sorted(tag.id for tag in article.tags)
    new_id = await objects.insert_data(
        "article", {"title": "Linked"}, many_to_many={"tags": tag_ids}
    )
    assert await objects.select_related_ids("article", new_id, "tags") == tag_ids


@pytest.mark.asyncio
async def test_select_related_ids_rejects_non_many_to_many(objects, article):
    with pytest.raises(ValueError):
        await objects.select_related_ids("article", article.id, "comments")
    with pytest.raises(ValueError):
        await objects.select_related_ids("article", article.id, "nope")


def test_metadata_accessors(objects):
    assert objects.object_exists("article")
    assert not objects.object_exists("ghost")
    assert objects.get_id_field("article") == "id"
    assert objects.get_date_created_field("article") == "datecreated"
    assert objects.get_date_modified_field("article") == "datemodified"
    assert objects.get_object_attribute("template", "clone_handler") == "template.clone"
    assert objects.get_object_attribute("article", "clone_handler") == ""
    assert list(objects.get_object_properties("tag")) == ["id", "label", "datecreated", "datemodified"]


# ── Default cloning end to end ───────────────────────────────────────


@pytest.mark.asyncio
async def test_clone_copies_columns_and_links(session, objects, article):
    service = CloneService(objects, InProcessEventDispatcher())
    assert service.list_cloneable_fields("article") == ["title", "code", "body", "category_id", "tags"]

    new_id = await service.clone_record("article", article.id, {"title": "Copy", "code": "A-2"})

    assert new_id != article.id
    [copy] = await objects.select_data("article", new_id)
    assert copy["title"] == "Copy"
    assert copy["code"] == "A-2"
    assert copy["body"] == "Body text"
    assert copy["category_id"] == article.category_id
    assert copy["slug"] is None
    assert copy["internal_notes"] is None

    original_tags = sorted(tag.id for tag in article.tags)
    assert await objects.select_related_ids("article", new_id, "tags") == original_tags

    comment_count = await session.scalar(
        select(func.count()).select_from(CommentModel).where(CommentModel.article_id == new_id)
    )
    assert comment_count == 0


@pytest.mark.asyncio
async def test_clone_propagates_database_errors(objects, article):
    service = CloneService(objects, InProcessEventDispatcher())

    # "code" is explicitly cloneable but unique, so copying it verbatim collides
    with pytest.raises(IntegrityError):
        await service.clone_record("article", article.id)
