from typing import Any, Dict, List, Optional

from neo4j import AsyncSession
from neo4j.exceptions import ConstraintError

from api.core.models import Skill
from api.core.schemas import SkillCreate, SkillUpdate
from api.core.utils import create_id, url_safe_string


class SkillAlreadyExistsError(Exception):
    """Raised when a skill id is already taken."""


async def _run(
    session: AsyncSession,
    query: str,
    params: Optional[Dict[str, Any]] = None,
    queries: Optional[List[Dict[str, Any]]] = None,
):
    params = params or {}
    if queries is not None:
        queries.append({"query": query, "params": params})
    return await session.run(query, params)


def _skill_properties(skill_in: SkillCreate) -> Dict[str, Any]:
    return {
        "id": skill_in.id or create_id(),
        "name": skill_in.name,
        "normalized": url_safe_string(skill_in.name),
    }


async def get_all_skills(session: AsyncSession, queries: Optional[List[dict]] = None) -> List[Dict[str, Any]]:
    result = await _run(
        session,
        "MATCH (skill:Skill) RETURN skill ORDER BY skill.name",
        queries=queries,
    )
    records = await result.data()
    return [Skill.from_node(record["skill"]) for record in records]


async def get_skill_by_id(
    session: AsyncSession, skill_id: str, queries: Optional[List[dict]] = None
) -> Optional[Dict[str, Any]]:
    result = await _run(
        session,
        "MATCH (skill:Skill {id: $id}) RETURN skill",
        {"id": skill_id},
        queries,
    )
    record = await result.single()
    if record is None:
        return None
    return Skill.from_node(record["skill"])


async def create_skill(
    session: AsyncSession, skill_in: SkillCreate, queries: Optional[List[dict]] = None
) -> Dict[str, Any]:
    """Create one skill node, generating an id when none is given."""
    try:
        result = await _run(
            session,
            "CREATE (skill:Skill) SET skill = $props RETURN skill",
            {"props": _skill_properties(skill_in)},
            queries,
        )
        record = await result.single()
    except ConstraintError as e:
        raise SkillAlreadyExistsError(str(e)) from e
    return Skill.from_node(record["skill"])


async def create_skills(
    session: AsyncSession, skills_in: List[SkillCreate], queries: Optional[List[dict]] = None
) -> List[Dict[str, Any]]:
    """Create many skill nodes in a single statement."""
    try:
        result = await _run(
            session,
            "UNWIND $list AS props CREATE (skill:Skill) SET skill = props RETURN skill",
            {"list": [_skill_properties(skill_in) for skill_in in skills_in]},
            queries,
        )
        records = await result.data()
    except ConstraintError as e:
        raise SkillAlreadyExistsError(str(e)) from e
    return [Skill.from_node(record["skill"]) for record in records]


async def update_skill(
    session: AsyncSession, skill_id: str, skill_in: SkillUpdate, queries: Optional[List[dict]] = None
) -> Optional[Dict[str, Any]]:
    result = await _run(
        session,
        "MATCH (skill:Skill {id: $id}) "
        "SET skill.name = $name, skill.normalized = $normalized "
        "RETURN skill",
        {"id": skill_id, "name": skill_in.name, "normalized": url_safe_string(skill_in.name)},
        queries,
    )
    record = await result.single()
    if record is None:
        return None
    return Skill.from_node(record["skill"])


async def delete_skill(session: AsyncSession, skill_id: str, queries: Optional[List[dict]] = None) -> int:
    """Delete a skill and its relationships; returns the number of nodes removed."""
    result = await _run(
        session,
        "MATCH (skill:Skill {id: $id}) DETACH DELETE skill RETURN count(skill) AS deleted",
        {"id": skill_id},
        queries,
    )
    record = await result.single()
    return record["deleted"] if record else 0


async def delete_all_skills(session: AsyncSession, queries: Optional[List[dict]] = None) -> int:
    result = await _run(
        session,
        "MATCH (skill:Skill) DETACH DELETE skill RETURN count(skill) AS deleted",
        queries=queries,
    )
    record = await result.single()
    return record["deleted"] if record else 0
