"""Rule evaluator — pure per-field predicates used by the validation engine.

Checks that can object to a field return True/False; checks that only ever
object (length, same-as) return None when they have no verdict, so callers
compare against ``False`` explicitly.
"""

import re
from fractions import Fraction
from typing import Optional

from formguard.models.fields import FieldDescriptor, FieldSet, FieldType
from formguard.validators.reference_data import (
    EMAIL_PATTERN,
    NUMBER_PATTERN,
    NUMERIC_ATTRIBUTE_PATTERN,
    PATTERN_TYPES,
)


class RuleEvaluator:
    """Evaluates the declared constraints of fields in one field set.

    Contract:
        - Every method is deterministic and side-effect free
        - The field set is only read, for radio siblings and same-as targets
        - Malformed attributes degrade to an invalid verdict, never an exception
    """

    def __init__(self, fields: Optional[FieldSet] = None):
        self.fields = fields if fields is not None else FieldSet()

    def is_empty(self, field: FieldDescriptor) -> bool:
        """Type-specific emptiness.

        For checkboxes this returns the checked state itself, so a checked
        checkbox counts as "empty". Kept as-is pending product clarification.
        """
        if field.type == FieldType.RADIO:
            siblings = self.fields.named(field.name) if field.name else [field]
            return not any(sibling.checked for sibling in siblings)

        if field.type == FieldType.CHECKBOX:
            return field.checked

        return field.value == ""

    def is_required(self, field: FieldDescriptor) -> bool:
        return field.required

    def check_pattern(self, field: FieldDescriptor) -> bool:
        """True iff the whole value matches the declared pattern."""
        return re.fullmatch(field.pattern, field.value) is not None

    def check_type(self, field: FieldDescriptor) -> bool:
        """Dispatch the value check on the field type."""
        if field.type == FieldType.EMAIL:
            if field.pattern is not None:
                return self.check_pattern(field)
            return EMAIL_PATTERN.fullmatch(field.value) is not None

        if field.type == FieldType.NUMBER:
            return self.check_number(field)

        if field.type in PATTERN_TYPES:
            if field.pattern is not None:
                return self.check_pattern(field)
            return True

        return True

    def check_length(self, field: FieldDescriptor) -> Optional[bool]:
        if field.maxlength is not None and len(field.value) > field.maxlength:
            return False
        return None

    def check_number(self, field: FieldDescriptor) -> bool:
        """Integer value within [min, max] where (min + value) is a multiple of step.

        Example: min="2" max="7" step="2" accepts "2", "4" and "6".
        """
        if NUMBER_PATTERN.fullmatch(field.value) is None:
            return False

        try:
            # Values past the interpreter's int digit limit degrade to invalid
            value = int(field.value) if field.value else 0
            minimum = self._numeric_attribute(field.min)
            maximum = self._numeric_attribute(field.max)
            step = self._numeric_attribute(field.step)
        except ValueError:
            return False

        if step is None:
            step = Fraction(1)
        if step <= 0:
            return False

        if maximum is not None and value > maximum:
            return False
        if minimum is not None and value < minimum:
            return False

        # Without a min the step counts from 0
        base = minimum if minimum is not None else 0
        return (base + value) % step == 0

    def check_special(self, field: FieldDescriptor) -> Optional[bool]:
        """Cross-field checks; currently only "same as another field"."""
        if field.same_as is None:
            return None

        other = self.fields.get(field.same_as)
        if other is None or field.value != other.value:
            return False
        return None

    # ── Helper Methods ──

    @staticmethod
    def _numeric_attribute(raw: Optional[str]) -> Optional[Fraction]:
        """Parse a min/max/step attribute exactly; None when not declared.

        Raises ValueError for anything but a plain finite decimal number.
        """
        if raw is None:
            return None
        text = raw.strip()
        if NUMERIC_ATTRIBUTE_PATTERN.fullmatch(text) is None:
            raise ValueError(f"Not a number: {raw!r}")
        return Fraction(text)
