"""Validation models — violation kinds, pass states, and the per-pass report."""

from enum import Enum

from pydantic import BaseModel, Field


class ViolationKind(str, Enum):
    """Why a field failed. Each kind has its own display slot in a group."""

    REQUIRED = "required"  # Required field left empty
    VALUE = "value"        # Length or type-specific value check failed
    SPECIAL = "special"    # Cross-field ("same as") check failed


class PassState(str, Enum):
    """Lifecycle of a single validation pass."""

    INIT = "init"
    EVALUATING_FIELDS = "evaluating_fields"
    EVALUATING_CUSTOM = "evaluating_custom"
    DONE = "done"


class Violation(BaseModel):
    """A single violation signal raised against a field's group."""

    field_id: str
    group_id: str
    kind: ViolationKind

    model_config = {"frozen": True}


class PassReport(BaseModel):
    """Outcome of one pass: verdict plus every violation in emission order."""

    valid: bool
    violations: list[Violation] = Field(default_factory=list)
    summary: dict = Field(
        description="Count of violations by kind",
        default_factory=lambda: {kind.value: 0 for kind in ViolationKind},
    )
    custom_failures: int = 0

    @classmethod
    def build(cls, valid: bool, violations: list[Violation], custom_failures: int = 0) -> "PassReport":
        summary = {kind.value: 0 for kind in ViolationKind}
        for violation in violations:
            summary[violation.kind.value] += 1
        return cls(
            valid=valid,
            violations=list(violations),
            summary=summary,
            custom_failures=custom_failures,
        )
