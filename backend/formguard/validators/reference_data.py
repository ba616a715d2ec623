"""Reference data for field rules — built-in patterns and type groupings.

Types not listed anywhere here (color, date, datetime, datetime-local, file,
month, range, time, url, week) are not implemented and always pass.
"""

import re

from formguard.models.fields import FieldType

# Only plain digits; decimals and signs are rejected
NUMBER_PATTERN = re.compile(r"[0-9]*")

# Case-sensitive on purpose: uppercase addresses do not match
EMAIL_PATTERN = re.compile(
    r"[a-z0-9!#$%&'*+/=?^_`{|}~.-]+@[a-z0-9-]+(\.[a-z0-9-]+)*"
)

# min/max/step must be plain finite decimals to take part in a numeric check;
# exponents have at most three digits
NUMERIC_ATTRIBUTE_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d{1,3})?")

# Controls that never take part in validation
NON_VALIDATED_TYPES = frozenset({
    FieldType.SUBMIT,
    FieldType.IMAGE,
    FieldType.HIDDEN,
    FieldType.RESET,
})

# Free-text types that honour a custom pattern and otherwise always pass
PATTERN_TYPES = frozenset({
    FieldType.TEL,
    FieldType.TEXT,
    FieldType.SEARCH,
})
