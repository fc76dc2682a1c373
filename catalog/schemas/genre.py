"""
Genre Pydantic Schemas

Schemas for the genre pages:
- GenreCreateForm / GenreUpdateForm: the submitted genre form
- GenreDeleteForm: the delete confirmation form
- GenreResponse: the cached, template-ready view of a genre

The form schemas sanitize as they validate: names are trimmed and their
HTML-significant characters escaped before the emptiness check runs, so
"   " and "" both fail and "<b>" is stored as "&lt;b&gt;".
"""

from typing import List

from markupsafe import escape
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

NAME_MAX_LENGTH = 100


def sanitize(value: str) -> str:
    """Trim and HTML-escape a submitted value."""
    return str(escape(value.strip()))


def _clean_name(value: str, required_message: str) -> str:
    value = sanitize(value)
    if not value:
        raise PydanticCustomError("required", required_message)
    if len(value) > NAME_MAX_LENGTH:
        raise PydanticCustomError(
            "too_long",
            "Genre name must be at most {max_length} characters",
            {"max_length": NAME_MAX_LENGTH},
        )
    return value


class GenreCreateForm(BaseModel):
    """Schema for the create genre form."""

    name: str = Field(
        default="",
        description="Genre name",
        examples=["Science Fiction", "Mystery", "Romance"],
    )

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        """Sanitize the name and reject it if nothing is left."""
        return _clean_name(v, "Genre name required")


class GenreUpdateForm(BaseModel):
    """Schema for the update genre form."""

    name: str = Field(default="", description="New genre name")

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        return _clean_name(v, "Name must not be empty.")


class GenreDeleteForm(BaseModel):
    """Schema for the delete confirmation form."""

    genreid: str = Field(default="", description="Id of the genre to delete")

    @field_validator("genreid")
    @classmethod
    def genreid_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise PydanticCustomError("required", "Genre id must exist")
        return v


class GenreResponse(BaseModel):
    """
    Template-ready genre.

    Built from a Genre row with model_validate(), or from a cached dict.
    """

    id: int = Field(..., description="Unique identifier")
    name: str = Field(..., description="Genre name (HTML-escaped)")
    url: str = Field(..., description="Path of the genre detail page")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Science Fiction",
                "url": "/catalog/genre/1",
            }
        },
    )


def form_errors(exc: ValidationError) -> List[dict]:
    """
    Flatten a ValidationError into the error list the form templates show.

    Returns:
        One {"param": field, "msg": message} dict per error
    """
    return [
        {
            "param": str(error["loc"][-1]) if error["loc"] else "",
            "msg": error["msg"],
        }
        for error in exc.errors()
    ]
