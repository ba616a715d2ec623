"""Field models — field types, declared constraints, and per-pass field descriptors."""

import re
from enum import Enum
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, Field, field_validator


class FieldType(str, Enum):
    """Input types the rule evaluator distinguishes.

    Any other type string (color, date, url, ...) parses to OTHER, which
    always passes type checks.
    """

    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    TEL = "tel"
    SEARCH = "search"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SUBMIT = "submit"
    IMAGE = "image"
    HIDDEN = "hidden"
    RESET = "reset"
    SELECT = "select"
    TEXTAREA = "textarea"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return cls.OTHER


class Group(BaseModel):
    """Error-reporting boundary: the nearest group container around a field."""

    id: str
    tag: str = "li"

    model_config = {"frozen": True}


class FieldSpec(BaseModel):
    """Declared shape of one field: identity, type and constraint attributes."""

    id: str = Field(min_length=1)
    name: Optional[str] = None  # Radio group name
    type: FieldType = FieldType.TEXT
    required: bool = False
    pattern: Optional[str] = None
    maxlength: Optional[int] = Field(default=None, ge=0)
    min: Optional[str] = None
    max: Optional[str] = None
    step: Optional[str] = None
    disabled: bool = False
    same_as: Optional[str] = None  # Id of the field this value must equal
    validates: Optional[str] = None  # Submit controls only: container id to validate

    model_config = {"frozen": True}

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value):
        if isinstance(value, FieldType):
            return value
        return FieldType(str(value))

    @field_validator("min", "max", "step", mode="before")
    @classmethod
    def _numeric_attribute_as_text(cls, value):
        # Attributes are kept raw; malformed ones are judged at check time
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid pattern {value!r}: {e}") from e
        return value


class FieldDescriptor(FieldSpec):
    """Read-only view of one field for the duration of a validation pass."""

    value: str = ""
    checked: bool = False
    group: Optional[Group] = None

    @classmethod
    def bind(
        cls,
        spec: FieldSpec,
        value: str = "",
        checked: bool = False,
        group: Optional[Group] = None,
    ) -> "FieldDescriptor":
        """Combine a declared spec with submitted state and its resolved group."""
        return cls(
            **spec.model_dump(exclude={"kind", "value", "checked", "group"}),
            value=value,
            checked=checked,
            group=group,
        )


class FieldSet:
    """Ordered, read-only collection of the descriptors taking part in one pass."""

    def __init__(self, fields: Iterable[FieldDescriptor] = ()):
        self._fields = tuple(fields)
        self._by_id = {field.id: field for field in self._fields}

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, field_id: str) -> Optional[FieldDescriptor]:
        return self._by_id.get(field_id)

    def named(self, name: str) -> list[FieldDescriptor]:
        """All fields sharing a (radio) group name, in document order."""
        return [field for field in self._fields if field.name == name]
