"""Form runtime — turns a submission into a validation pass and a verdict."""

import threading
from typing import Iterable, Optional

import structlog

from formguard.models.responses import SubmissionOutcome
from formguard.services.layout import FormLayout
from formguard.validators.engine import CustomValidation, ValidationEngine
from formguard.validators.presenter import ErrorPresenter

logger = structlog.get_logger()


class FormRuntime:
    """Binds one compiled form to its own validation engine.

    Submissions on one runtime are serialised, so passes never overlap.
    """

    def __init__(
        self,
        layout: FormLayout,
        engine: Optional[ValidationEngine] = None,
        presenter: Optional[ErrorPresenter] = None,
    ):
        self.layout = layout
        self.engine = engine if engine is not None else ValidationEngine(presenter)
        self._lock = threading.Lock()

    @property
    def form_id(self) -> str:
        return self.layout.form_id

    @property
    def presenter(self) -> ErrorPresenter:
        return self.engine.presenter

    def add_validation(self, predicate: CustomValidation) -> None:
        self.engine.add_validation(predicate)

    def submit(
        self,
        values: Optional[dict[str, str]] = None,
        checked: Iterable[str] = (),
        trigger: Optional[str] = None,
    ) -> SubmissionOutcome:
        """Validate a submission and decide whether it may proceed.

        Args:
            values: Field id to submitted value
            checked: Ids of checked checkboxes and radio buttons
            trigger: Id of the submit control that was used, if any

        Returns:
            SubmissionOutcome; a blocked submission asks the view to scroll
            back to the top
        """
        fields = self.layout.bind(values, checked)
        candidates = self.layout.candidates(fields, trigger)

        with self._lock:
            valid = self.engine.run_pass(fields, candidates)
            report = self.engine.report()

        outcome = SubmissionOutcome(
            form_id=self.form_id,
            allowed=valid,
            scroll_to_top=not valid,
            violations=report.violations,
            summary=report.summary,
            custom_failures=report.custom_failures,
            skipped=[f.id for f in candidates if f.group is None],
            trigger=trigger,
        )

        if valid:
            logger.info("submission_allowed", form_id=self.form_id, fields=len(candidates))
        else:
            logger.info(
                "submission_blocked",
                form_id=self.form_id,
                violations=len(report.violations),
                summary=report.summary,
                custom_failures=report.custom_failures,
            )

        return outcome
