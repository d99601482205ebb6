import json
import logging
from typing import Any, Dict, Optional

from fastapi import Request

from api.core.errors import invalid
from api.core.utils import exists_in_query

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def get_request_params(request: Request) -> Dict[str, Any]:
    """Request body as a dict, from either a JSON object or form fields."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except Exception as e:
            logger.warning(f"Unreadable form body: {e}")
            raise invalid("input") from e
        return {key: value for key, value in form.items()}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError as e:
        raise invalid("input") from e
    if not isinstance(body, dict):
        raise invalid("input")
    return body


def prepare_params(body: Optional[Dict[str, Any]], skill_id: Optional[str] = None) -> Dict[str, Any]:
    params = dict(body or {})
    params["id"] = skill_id or params.get("id")
    return params


async def get_query_options(request: Request) -> Dict[str, bool]:
    return {"neo4j": exists_in_query(request, "neo4j")}
