"""Form registry — in-memory store of compiled forms and their runtimes."""

from typing import Optional

import structlog

from formguard.config import get_settings
from formguard.exceptions import (
    FormAlreadyRegisteredError,
    FormNotFoundError,
    RegistryFullError,
)
from formguard.models.forms import FormDefinition
from formguard.services.form_runtime import FormRuntime
from formguard.services.layout import FormLayout

logger = structlog.get_logger()


class FormRegistry:
    """Holds one FormRuntime (and so one engine) per registered form."""

    def __init__(self, max_forms: Optional[int] = None):
        self.max_forms = max_forms or get_settings().MAX_FORMS
        self._runtimes: dict[str, FormRuntime] = {}

    def __len__(self) -> int:
        return len(self._runtimes)

    def register(self, definition: FormDefinition) -> FormRuntime:
        """Compile a definition and create its runtime.

        Raises:
            FormAlreadyRegisteredError: the id is taken
            RegistryFullError: max_forms reached
            FormDefinitionError: the definition is structurally invalid
        """
        if definition.id in self._runtimes:
            raise FormAlreadyRegisteredError(definition.id)
        if len(self._runtimes) >= self.max_forms:
            raise RegistryFullError(f"Registry holds the maximum of {self.max_forms} forms")

        runtime = FormRuntime(FormLayout.compile(definition))
        self._runtimes[definition.id] = runtime

        logger.info(
            "form_registered",
            form_id=definition.id,
            fields=len(runtime.layout.specs),
            groups=len(runtime.layout.groups),
        )
        return runtime

    def get(self, form_id: str) -> FormRuntime:
        runtime = self._runtimes.get(form_id)
        if runtime is None:
            raise FormNotFoundError(form_id)
        return runtime

    def list_ids(self) -> list[str]:
        return list(self._runtimes)

    def delete(self, form_id: str) -> None:
        if self._runtimes.pop(form_id, None) is None:
            raise FormNotFoundError(form_id)
        logger.info("form_deleted", form_id=form_id)

    def exists(self, form_id: str) -> bool:
        return form_id in self._runtimes
