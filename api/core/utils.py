import json
import time
import uuid
from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from slugify import slugify

# Keeps the Neo4j header under common proxy header limits
NEO4J_HEADER_LIMIT = 8 * 1024


def url_safe_string(text: str) -> str:
    """Lowercase ASCII slug; non-Latin scripts are transliterated."""
    if not isinstance(text, str):
        return ""
    return slugify(text)


def create_id() -> str:
    return uuid.uuid4().hex


def exists_in_query(request: Request, name: str) -> bool:
    """True for ``?name``, ``?name=`` or ``?name=1``; false for ``?name=false``/``0``."""
    if name not in request.query_params:
        return False
    return request.query_params.get(name, "").strip().lower() not in ("false", "0")


def encode_queries(queries: List[Dict[str, Any]], limit: int = NEO4J_HEADER_LIMIT) -> str:
    """JSON list of executed statements; parameters are dropped when the full list is over ``limit``."""
    # json.dumps escapes non-ASCII, keeping the header latin-1 safe
    encoded = json.dumps(jsonable_encoder(queries))
    if len(encoded) <= limit:
        return encoded
    return json.dumps([{"query": q.get("query")} for q in queries])


def write_response(
    results: Any,
    queries: Optional[List[Dict[str, Any]]] = None,
    start: Optional[float] = None,
    status_code: int = 200,
) -> JSONResponse:
    headers = {}
    if start is not None:
        headers["Duration-ms"] = str(int((time.monotonic() - start) * 1000))
    if queries is not None:
        headers["Neo4j"] = encode_queries(queries)
    return JSONResponse(
        content=jsonable_encoder(results), status_code=status_code, headers=headers
    )
