"""API response models."""

from pydantic import BaseModel, Field
from typing import Optional, Literal

from formguard.models.fields import Group
from formguard.validators.models import Violation


class SubmissionOutcome(BaseModel):
    """Result of one submission attempt against a form."""

    form_id: str
    allowed: bool
    scroll_to_top: bool = False  # Set when the submission is blocked
    violations: list[Violation] = Field(default_factory=list)
    summary: dict = Field(default_factory=dict)
    custom_failures: int = 0
    skipped: list[str] = Field(default_factory=list, description="Field ids outside any group")
    trigger: Optional[str] = None


class FormSummaryResponse(BaseModel):
    """A registered form and its compiled structure."""

    form_id: str
    field_ids: list[str]
    groups: list[Group]
    ungrouped: list[str] = []
    custom_validations: int = 0


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    registered_forms: int = 0
