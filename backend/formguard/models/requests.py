"""API request models."""

from pydantic import BaseModel, Field
from typing import Optional


class SubmissionRequest(BaseModel):
    """Submitted state of a form's fields."""

    values: dict[str, str] = Field(
        default_factory=dict,
        description="Field id to submitted value",
        examples=[{"email": "a@b.com", "password": "x", "password_repeat": "x"}],
    )
    checked: list[str] = Field(
        default_factory=list,
        description="Ids of checked checkboxes and radio buttons",
    )
    trigger: Optional[str] = Field(
        default=None,
        description="Id of the submit control that started the submission",
    )
