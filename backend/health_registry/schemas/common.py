"""Shared schema base and response envelope.

Responses use camelCase keys; requests accept camelCase or snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(ApiModel):
    """Envelope shared by every endpoint: ``{success, message, ...data}``."""

    success: bool = True
    message: str = ""


class HealthIdRequest(ApiModel):
    health_id: str | None = None
