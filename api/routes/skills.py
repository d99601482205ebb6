import json
import logging
import time
from typing import Any, Awaitable, Dict, List, Optional

from fastapi import APIRouter, Depends, Path
from neo4j import AsyncSession
from neo4j.exceptions import DriverError, Neo4jError
from pydantic import ValidationError

from api.core.database import get_async_session
from api.core.db import skill_crud
from api.core.db.skill_crud import SkillAlreadyExistsError
from api.core.dependencies import get_query_options, get_request_params, prepare_params
from api.core.errors import error_responses, invalid, not_found
from api.core.schemas import SkillCreate, SkillRead, SkillsDeleted, SkillUpdate
from api.core.utils import write_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/skills", tags=["skills"])

SKILL_ID_DESCRIPTION = "ID of skill that needs to be fetched"


# --- Helpers ---
def _form_body(properties: Dict[str, Dict[str, Any]], required: List[str]) -> Dict[str, Any]:
    """OpenAPI request body accepting the same fields as form data or JSON."""
    schema = {"type": "object", "properties": properties, "required": required}
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/x-www-form-urlencoded": {"schema": schema},
                "multipart/form-data": {"schema": schema},
                "application/json": {"schema": schema},
            },
        }
    }


SKILL_FORM = _form_body(
    {
        "name": {"type": "string", "description": "Skill name. A normalized id will be created from this."},
        "id": {"type": "string", "description": "Optional skill id; generated when omitted."},
    },
    ["name"],
)

SKILL_UPDATE_FORM = _form_body(
    {"name": {"type": "string", "description": "Skill name. A normalized id will be created from this."}},
    ["name"],
)

SKILL_BATCH_FORM = _form_body(
    {"list": {"type": "string", "description": "Array of skill object JSON strings"}},
    ["list"],
)


def _queries(options: Dict[str, bool]) -> Optional[List[dict]]:
    return [] if options.get("neo4j") else None


async def _model_call(err_label: str, call: Awaitable[Any]) -> Any:
    try:
        return await call
    except (SkillAlreadyExistsError, Neo4jError, DriverError) as e:
        logger.error(f"{err_label} {e!r}")
        raise invalid("input") from e


def _callback(err_label: str, results: Any, queries: Optional[List[dict]], start: float):
    if results is None:
        logger.error(f"{err_label} returned no results")
        raise invalid("input")
    return write_response(results, queries, start)


def _require_id(skill_id: str) -> str:
    skill_id = skill_id.strip()
    if not skill_id:
        raise invalid("id")
    return skill_id


# --- Collection Endpoints ---
@router.get(
    "",
    response_model=List[SkillRead],
    summary="Find all skills",
    description="Returns all skills",
    operation_id="getSkills",
    responses=error_responses(not_found("skills")),
)
async def list_skills(
    options: dict = Depends(get_query_options),
    session: AsyncSession = Depends(get_async_session),
):
    """List all skills."""
    err_label = "Route: GET /skills"
    start = time.monotonic()
    queries = _queries(options)

    skills = await _model_call(err_label, skill_crud.get_all_skills(session, queries=queries))
    return _callback(err_label, skills, queries, start)


@router.post(
    "",
    response_model=SkillRead,
    summary="Add a new skill to the graph",
    description="adds a skill to the graph",
    operation_id="addSkill",
    responses=error_responses(invalid("input")),
    openapi_extra=SKILL_FORM,
)
async def add_skill(
    body: dict = Depends(get_request_params),
    options: dict = Depends(get_query_options),
    session: AsyncSession = Depends(get_async_session),
):
    err_label = "Route: POST /skills"
    start = time.monotonic()
    queries = _queries(options)

    try:
        skill_in = SkillCreate.model_validate(prepare_params(body))
    except ValidationError as e:
        raise invalid("input") from e

    skill = await _model_call(err_label, skill_crud.create_skill(session, skill_in, queries=queries))
    return _callback(err_label, skill, queries, start)


@router.post(
    "/batch",
    response_model=List[SkillRead],
    summary="Add multiple skills to the graph",
    description="add skills to the graph",
    operation_id="addSkills",
    responses=error_responses(invalid("list")),
    openapi_extra=SKILL_BATCH_FORM,
)
async def add_skills(
    body: dict = Depends(get_request_params),
    options: dict = Depends(get_query_options),
    session: AsyncSession = Depends(get_async_session),
):
    """Create every skill in ``list``; the whole batch is rejected if any item is invalid."""
    err_label = "Route: POST /skills/batch"
    start = time.monotonic()
    queries = _queries(options)

    raw_list = body.get("list")
    if isinstance(raw_list, str):
        try:
            raw_list = json.loads(raw_list)
        except ValueError as e:
            raise invalid("list") from e
    if not isinstance(raw_list, list) or not raw_list:
        raise invalid("list")

    try:
        skills_in = [
            SkillCreate.model_validate(prepare_params(item))
            for item in raw_list
            if isinstance(item, dict)
        ]
    except ValidationError as e:
        raise invalid("list") from e
    if len(skills_in) != len(raw_list):
        raise invalid("list")

    skills = await _model_call(err_label, skill_crud.create_skills(session, skills_in, queries=queries))
    return _callback(err_label, skills, queries, start)


@router.delete(
    "",
    response_model=SkillsDeleted,
    summary="Delete all skills",
    description="Deletes all skills and their relationships",
    operation_id="deleteAllSkills",
)
async def delete_all_skills(
    options: dict = Depends(get_query_options),
    session: AsyncSession = Depends(get_async_session),
):
    err_label = "Route: DELETE /skills"
    start = time.monotonic()
    queries = _queries(options)

    deleted = await _model_call(err_label, skill_crud.delete_all_skills(session, queries=queries))
    logger.info(f"{err_label} deleted {deleted} skills")
    return _callback(err_label, {"deleted": deleted}, queries, start)


# --- Single Skill Endpoints ---
@router.get(
    "/{id}",
    response_model=SkillRead,
    summary="Find skill by id",
    description="Returns a skill based on id",
    operation_id="getSkillById",
    responses=error_responses(invalid("id"), not_found("skill")),
)
async def read_skill(
    skill_id: str = Path(..., alias="id", description=SKILL_ID_DESCRIPTION),
    options: dict = Depends(get_query_options),
    session: AsyncSession = Depends(get_async_session),
):
    """Get skill by ID."""
    skill_id = _require_id(skill_id)
    err_label = "Route: GET /skills/{id}"
    start = time.monotonic()
    queries = _queries(options)

    skill = await _model_call(err_label, skill_crud.get_skill_by_id(session, skill_id, queries=queries))
    return _callback(err_label, skill, queries, start)


@router.post(
    "/{id}",
    response_model=SkillRead,
    summary="Update a skill",
    description="Updates an existing skill",
    operation_id="updateSkill",
    responses=error_responses(invalid("input")),
    openapi_extra=SKILL_UPDATE_FORM,
)
async def update_skill(
    skill_id: str = Path(..., alias="id", description=SKILL_ID_DESCRIPTION),
    body: dict = Depends(get_request_params),
    options: dict = Depends(get_query_options),
    session: AsyncSession = Depends(get_async_session),
):
    skill_id = _require_id(skill_id)
    err_label = "Route: POST /skills/{id}"
    start = time.monotonic()
    queries = _queries(options)

    try:
        skill_in = SkillUpdate.model_validate(prepare_params(body, skill_id))
    except ValidationError as e:
        raise invalid("input") from e

    skill = await _model_call(err_label, skill_crud.update_skill(session, skill_id, skill_in, queries=queries))
    return _callback(err_label, skill, queries, start)


@router.delete(
    "/{id}",
    response_model=SkillsDeleted,
    summary="Delete a skill",
    description="Deletes an existing skill and its relationships",
    operation_id="deleteSkill",
    responses=error_responses(invalid("input")),
)
async def delete_skill(
    skill_id: str = Path(..., alias="id", description="ID of skill to be deleted"),
    options: dict = Depends(get_query_options),
    session: AsyncSession = Depends(get_async_session),
):
    skill_id = _require_id(skill_id)
    err_label = "Route: DELETE /skills/{id}"
    start = time.monotonic()
    queries = _queries(options)

    deleted = await _model_call(err_label, skill_crud.delete_skill(session, skill_id, queries=queries))
    return _callback(err_label, {"deleted": deleted} if deleted else None, queries, start)
