from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """Error rendered as ``{"code": ..., "message": ...}``."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


def invalid(field: str) -> ApiError:
    return ApiError(400, f"invalid {field}")


def not_found(field: str) -> ApiError:
    return ApiError(404, f"{field} not found")


def error_responses(*errors: ApiError) -> Dict[int, Dict[str, Any]]:
    """OpenAPI ``responses`` entries for a route decorator."""
    responses: Dict[int, Dict[str, Any]] = {}
    for error in errors:
        entry = responses.setdefault(
            error.code,
            {"description": error.message, "content": {"application/json": {"example": error.to_dict()}}},
        )
        if entry["description"] != error.message:
            entry["description"] = f"{entry['description']}; {error.message}"
    return responses


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.code, content=exc.to_dict())
