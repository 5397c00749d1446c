# =============================================================================
# core/models/item.py - Item Schemas
# =============================================================================
# These models define the API contract for item operations:
# - ItemCreate: Input for POST /items
# - ItemUpdate: Input for PUT /items/{id}
# - Item: Output when returning item data to clients
# - ItemDeleteResponse: Output for DELETE /items/{id}
#
# An item is an integer id plus one text field. The id is assigned by the
# store and never reused while that store is alive.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from lib.utils import clean_name

NAME_MAX_LENGTH = 255


def _validate_name(value: str) -> str:
    # Length limits apply to the stripped name
    value = clean_name(value)
    if not value:
        raise ValueError("name must not be blank")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"name must be at most {NAME_MAX_LENGTH} characters")
    return value


class ItemCreate(BaseModel):
    """
    Schema for creating a new item.

    Example:
        {"name": "Buy milk"}
    """

    name: str = Field(
        ...,
        description=f"Text of the item (1-{NAME_MAX_LENGTH} characters after stripping whitespace)"
    )

    @field_validator("name")
    @classmethod
    def name_length(cls, v: str) -> str:
        return _validate_name(v)

    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Buy milk"}]
        }
    }


class ItemUpdate(BaseModel):
    """Schema for renaming an existing item."""

    name: str = Field(
        ...,
        description=f"New text of the item (1-{NAME_MAX_LENGTH} characters after stripping whitespace)"
    )

    @field_validator("name")
    @classmethod
    def name_length(cls, v: str) -> str:
        return _validate_name(v)


class Item(BaseModel):
    """
    Schema for returning item data to clients.

    Returned by:
    - GET /items (as a list)
    - POST /items
    - GET /items/{id}
    - PUT /items/{id}

    Example:
        {
            "id": 1,
            "name": "Buy milk",
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    id: int = Field(
        ...,
        ge=1,
        description="Unique item identifier"
    )

    name: str = Field(
        ...,
        description="Text of the item"
    )

    created_at: datetime = Field(
        ...,
        description="Timestamp when the item was created (UTC)"
    )


class ItemDeleteResponse(BaseModel):
    """
    Response for DELETE /items/{id}.

    Deleting an id that doesn't exist is not an error: `deleted` is False
    and nothing changes.
    """

    id: int
    deleted: bool
    message: str
