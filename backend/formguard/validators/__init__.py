"""Field validation — rule evaluation and per-pass aggregation for form fields.

Usage:
    from formguard.validators import ValidationEngine

    engine = ValidationEngine()
    if not engine.run_pass(fields):
        # Block the submission, engine.report() lists the violations
"""

from formguard.validators.engine import CustomValidation, ValidationEngine
from formguard.validators.models import PassReport, PassState, Violation, ViolationKind
from formguard.validators.presenter import ErrorPresenter, RecordingPresenter
from formguard.validators.rules import RuleEvaluator

__all__ = [
    "CustomValidation",
    "ValidationEngine",
    "RuleEvaluator",
    "ErrorPresenter",
    "RecordingPresenter",
    "PassReport",
    "PassState",
    "Violation",
    "ViolationKind",
]
