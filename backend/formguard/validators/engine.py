"""Validation Engine — runs field rules and custom validations, owns the verdict.

This is the main entry point for validating a form submission. Each pass
resets the verdict, evaluates every candidate field through the rule
evaluator, signals violations to the presenter, then runs the registered
custom validations.

Usage:
    engine = ValidationEngine(presenter)
    engine.add_validation(lambda: terms_accepted())
    if not engine.run_pass(fields):
        # Block the submission, engine.violations says why
"""

import time
from typing import Callable, Iterable, Optional

import structlog

from formguard.exceptions import PassInProgressError
from formguard.models.fields import FieldDescriptor, FieldSet
from formguard.validators.models import PassReport, PassState, Violation, ViolationKind
from formguard.validators.presenter import ErrorPresenter, RecordingPresenter
from formguard.validators.reference_data import NON_VALIDATED_TYPES
from formguard.validators.rules import RuleEvaluator

logger = structlog.get_logger()

# Zero-argument predicate evaluated once per pass
CustomValidation = Callable[[], bool]


class ValidationEngine:
    """Aggregates field and custom validation results into one verdict.

    Design principles:
        - One engine per form, owned by the caller; no process-wide state
        - Violations are recorded in emission order, never de-duplicated
        - Custom validations all run, newest first, with no short-circuit
        - Passes are sequential; the engine is not thread-safe
    """

    def __init__(
        self,
        presenter: Optional[ErrorPresenter] = None,
        custom_validations: Optional[list[CustomValidation]] = None,
    ):
        self.presenter = presenter if presenter is not None else RecordingPresenter()
        self.custom_validations: list[CustomValidation] = list(custom_validations or [])
        # No pass has run yet, so nothing has been shown to be valid
        self.valid = False
        self.violations: list[Violation] = []
        self.custom_failures = 0
        self.state = PassState.INIT

    def add_validation(self, predicate: CustomValidation) -> None:
        """Register a custom validation for every future pass."""
        self.custom_validations.append(predicate)

    def check_valid(self, field: FieldDescriptor, fields: Optional[FieldSet] = None) -> None:
        """Evaluate one field and signal its violations.

        Args:
            field: The field to evaluate
            fields: The field set used to resolve radio siblings and
                same-as targets. Defaults to a set holding only ``field``.
        """
        evaluator = RuleEvaluator(fields if fields is not None else FieldSet([field]))
        self._check_field(field, evaluator)

    def run_pass(
        self,
        fields: FieldSet,
        candidates: Optional[Iterable[FieldDescriptor]] = None,
    ) -> bool:
        """Run a full validation pass and return the verdict.

        Args:
            fields: Every field of the form, in document order
            candidates: Fields to validate; defaults to all of ``fields``.
                Lookups (radio siblings, same-as) always use ``fields``.

        Returns:
            True if no field raised a violation and every custom
            validation returned True
        """
        if self.state in (PassState.EVALUATING_FIELDS, PassState.EVALUATING_CUSTOM):
            raise PassInProgressError("A validation pass is already running")

        start_time = time.perf_counter()

        self.state = PassState.INIT
        self.valid = True
        self.violations = []
        self.custom_failures = 0
        self.presenter.hide_all_violations()
        self.presenter.clear_all()

        try:
            self.state = PassState.EVALUATING_FIELDS
            evaluator = RuleEvaluator(fields)
            for field in (fields if candidates is None else candidates):
                self._check_field(field, evaluator)
            fields_duration = (time.perf_counter() - start_time) * 1000

            self.state = PassState.EVALUATING_CUSTOM
            self._run_custom_validations()
        finally:
            self.state = PassState.DONE
        total_duration = (time.perf_counter() - start_time) * 1000

        logger.info(
            "validation_pass_complete",
            valid=self.valid,
            violations=len(self.violations),
            custom_validations=len(self.custom_validations),
            custom_failures=self.custom_failures,
            fields_ms=round(fields_duration, 2),
            duration_ms=round(total_duration, 2),
        )

        return self.valid

    def report(self) -> PassReport:
        """Summarise the most recent pass."""
        return PassReport.build(self.valid, self.violations, self.custom_failures)

    # ── Internals ──

    def _check_field(self, field: FieldDescriptor, evaluator: RuleEvaluator) -> None:
        # Fields outside any group are a layout precondition failure: skip
        if field.group is None:
            logger.debug("field_skipped", field=field.id, reason="no_group")
            return

        if field.type in NON_VALIDATED_TYPES or field.disabled:
            return

        if evaluator.is_empty(field):
            if evaluator.is_required(field):
                self._signal(field, ViolationKind.REQUIRED)
        elif evaluator.check_length(field) is False or evaluator.check_type(field) is False:
            self._signal(field, ViolationKind.VALUE)

        if evaluator.check_special(field) is False:
            self._signal(field, ViolationKind.SPECIAL)

    def _signal(self, field: FieldDescriptor, kind: ViolationKind) -> None:
        self.presenter.mark_group_error(field.group)
        self.presenter.show_violation(field.group, kind)
        self.violations.append(Violation(field_id=field.id, group_id=field.group.id, kind=kind))
        self.valid = False

    def _run_custom_validations(self) -> None:
        """Evaluate every custom validation, newest first, folding with AND."""
        results = []
        for predicate in reversed(self.custom_validations):
            try:
                results.append(bool(predicate()))
            except Exception as e:
                logger.error(
                    "custom_validation_failed",
                    validation=getattr(predicate, "__name__", repr(predicate)),
                    error=str(e),
                )
                # A crashing validation counts as a failed one
                results.append(False)

        self.custom_failures = results.count(False)
        if not all(results):
            self.valid = False
