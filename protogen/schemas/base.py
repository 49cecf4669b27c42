from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Request body with camelCase JSON keys and snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


class ErrorBody(BaseModel):
    message: str
    code: str
    stack: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorBody


def ok(data: Any) -> dict:
    return {"success": True, "data": data}
