"""
Request body schemas for the Recap API.

Field names follow the camelCase JSON of the client; Python attributes are
snake_case.
"""
from typing import List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recap.errors import ValidationFailed


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(RequestModel):
    """Request body for creating an account."""
    email: str
    password: str = Field(..., min_length=1)
    full_name: str = Field(..., alias="fullName", min_length=1)


class LoginRequest(RequestModel):
    email: str
    password: str = Field(..., min_length=1)


class ThemeRequest(RequestModel):
    theme: Literal["light", "dark"]


class SummaryCreateRequest(RequestModel):
    """Request body for creating a summary from a transcript."""
    title: str
    original_content: str = Field(..., alias="originalContent")
    prompt: str
    tone: str


class SummaryUpdateRequest(RequestModel):
    """Partial update; omitted fields stay unchanged."""
    summary_content: Optional[str] = Field(None, alias="summaryContent")
    status: Optional[str] = None
    auto_saved: Optional[bool] = Field(None, alias="autoSaved")
    word_count: Optional[int] = Field(None, alias="wordCount")


class EmailShareRequest(RequestModel):
    recipients: List[str]
    subject: str
    format: str
    cc_self: bool = Field(False, alias="ccSelf")


def _format_errors(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "body"
        parts.append(f"{location}: {item.get('msg')}")
    return "Validation error: " + "; ".join(parts)


def parse_body(schema, data):
    """
    Validate a JSON body against a schema.

    Raises:
        ValidationFailed: with a readable description of every problem
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationFailed("Validation error: request body must be a JSON object")
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed(_format_errors(e))
