"""Exceptions raised while compiling or serving forms.

Validation outcomes are never reported through exceptions; these cover
structural problems with a form definition and misuse of the engine.
"""


class FormDefinitionError(ValueError):
    """A form definition violates a structural precondition."""


class UngroupedFieldError(FormDefinitionError):
    """A field has no enclosing error-reporting group inside the form."""

    def __init__(self, field_ids: list[str]):
        self.field_ids = field_ids
        super().__init__(f"Fields outside any group: {', '.join(field_ids)}")


class UnknownReferenceError(FormDefinitionError):
    """A field or submit trigger points at an id that does not exist."""

    def __init__(self, source: str, target: str):
        self.source = source
        self.target = target
        super().__init__(f"'{source}' references unknown id '{target}'")


class DuplicateFieldError(FormDefinitionError):
    def __init__(self, field_id: str):
        self.field_id = field_id
        super().__init__(f"Duplicate field id '{field_id}'")


class FormNotFoundError(LookupError):
    def __init__(self, form_id: str):
        self.form_id = form_id
        super().__init__(f"Form {form_id} not found")


class FormAlreadyRegisteredError(Exception):
    def __init__(self, form_id: str):
        self.form_id = form_id
        super().__init__(f"Form {form_id} is already registered")


class RegistryFullError(Exception):
    """The registry holds the configured maximum number of forms."""


class PassInProgressError(RuntimeError):
    """A validation pass was started before the previous one finished."""


class DuplicateContainerError(FormDefinitionError):
    def __init__(self, container_id: str):
        self.container_id = container_id
        super().__init__(f"Duplicate container id '{container_id}'")
