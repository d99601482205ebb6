"""Tests for the Cypher-backed skill model layer."""

import pytest
from neo4j.exceptions import ConstraintError

from api.core.db import skill_crud
from api.core.db.skill_crud import SkillAlreadyExistsError
from api.core.schemas import SkillCreate, SkillUpdate
from tests.conftest import FakeSession


@pytest.mark.asyncio
async def test_get_all_skills_maps_nodes(fake_session: FakeSession):
    fake_session.push(
        {"skill": {"id": "1", "name": "Go", "normalized": "go", "extra": "ignored"}},
        {"skill": {"id": "2", "name": "Rust"}},
    )

    skills = await skill_crud.get_all_skills(fake_session)

    assert skills == [
        {"id": "1", "name": "Go", "normalized": "go"},
        {"id": "2", "name": "Rust", "normalized": None},
    ]
    assert "ORDER BY skill.name" in fake_session.calls[0][0]


@pytest.mark.asyncio
async def test_get_skill_by_id_missing(fake_session: FakeSession):
    assert await skill_crud.get_skill_by_id(fake_session, "nope") is None


@pytest.mark.asyncio
async def test_create_skill_generates_id_and_normalized_name(fake_session: FakeSession):
    fake_session.push({"skill": {"id": "x", "name": "C++ / Qt", "normalized": "c-qt"}})

    await skill_crud.create_skill(fake_session, SkillCreate(name="C++ / Qt"))

    _, params = fake_session.calls[0]
    props = params["props"]
    assert len(props["id"]) == 32
    assert props["name"] == "C++ / Qt"
    assert props["normalized"] == "c-qt"


@pytest.mark.asyncio
async def test_create_skill_duplicate_raises(fake_session: FakeSession):
    fake_session.error = ConstraintError("already exists")

    with pytest.raises(SkillAlreadyExistsError):
        await skill_crud.create_skill(fake_session, SkillCreate(id="1", name="Go"))


@pytest.mark.asyncio
async def test_create_skills_single_statement(fake_session: FakeSession):
    fake_session.push({"skill": {"id": "a", "name": "Go"}}, {"skill": {"id": "b", "name": "Rust"}})

    skills = await skill_crud.create_skills(
        fake_session, [SkillCreate(id="a", name="Go"), SkillCreate(name="Rust")]
    )

    assert [s["id"] for s in skills] == ["a", "b"]
    assert len(fake_session.calls) == 1
    _, params = fake_session.calls[0]
    assert params["list"][0]["id"] == "a"
    assert params["list"][1]["id"] != params["list"][0]["id"]


@pytest.mark.asyncio
async def test_update_skill_renormalizes(fake_session: FakeSession):
    fake_session.push({"skill": {"id": "1", "name": "Élixir", "normalized": "elixir"}})

    skill = await skill_crud.update_skill(fake_session, "1", SkillUpdate(name="Élixir"))

    assert skill["name"] == "Élixir"
    _, params = fake_session.calls[0]
    assert params == {"id": "1", "name": "Élixir", "normalized": "elixir"}


@pytest.mark.asyncio
async def test_update_skill_missing(fake_session: FakeSession):
    assert await skill_crud.update_skill(fake_session, "1", SkillUpdate(name="Go")) is None


@pytest.mark.asyncio
async def test_delete_counts(fake_session: FakeSession):
    fake_session.push({"deleted": 1})
    fake_session.push({"deleted": 4})

    assert await skill_crud.delete_skill(fake_session, "1") == 1
    assert await skill_crud.delete_all_skills(fake_session) == 4
    assert all("DETACH DELETE" in query for query, _ in fake_session.calls)


@pytest.mark.asyncio
async def test_queries_are_recorded_when_requested(fake_session: FakeSession):
    queries = []

    await skill_crud.get_skill_by_id(fake_session, "1", queries=queries)
    await skill_crud.delete_skill(fake_session, "1", queries=queries)

    assert [q["params"] for q in queries] == [{"id": "1"}, {"id": "1"}]
    assert [q["query"] for q in queries] == [call[0] for call in fake_session.calls]
