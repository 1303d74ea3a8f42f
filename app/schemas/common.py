# app/schemas/common.py
"""Common schemas used across multiple modules."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class APIModel(BaseModel):
    """
    Base for every request/response schema.

    The web client speaks camelCase (``tasksCount``, ``isPaid``); fields are
    declared in snake_case and both spellings are accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

class Message(APIModel):
    message: str = Field(..., description="Human-readable outcome")
