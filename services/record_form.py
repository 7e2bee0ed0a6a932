from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from models import FIELD_NAMES, StudentRecord


logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

Predicate = Callable[[str], bool]
Rule = Tuple[Predicate, str]


def required() -> Rule:
    return (lambda v: bool(v), "required")


# Length and format checks pass on empty values; only "required" reports those.
def min_length(n: int) -> Rule:
    return (lambda v: not v or len(v) >= n, "minlength")


def max_length(n: int) -> Rule:
    return (lambda v: not v or len(v) <= n, "maxlength")


def email() -> Rule:
    return (lambda v: not v or bool(EMAIL_RE.match(v)), "email")


STUDENT_RULES: Dict[str, List[Rule]] = {
    "firstName": [required(), min_length(2)],
    "lastName": [required(), min_length(2)],
    "idNumber": [required(), min_length(7), max_length(10)],
    "phone": [required(), min_length(7), max_length(11)],
    "email": [required(), email()],
}


@dataclass
class FieldState:
    value: str = ""
    touched: bool = False


class RecordForm:
    """Five-field student form with per-field rules and touched-state gating."""

    def __init__(self, rules: Optional[Dict[str, List[Rule]]] = None) -> None:
        self.rules = rules if rules is not None else STUDENT_RULES
        self._fields: Dict[str, FieldState] = {name: FieldState() for name in self.rules}

    def has_field(self, name: str) -> bool:
        return name in self._fields

    def get_value(self, name: str) -> str:
        return self._fields[name].value

    def set_value(self, name: str, value: Any) -> None:
        if name not in self._fields:
            raise KeyError(f"Unknown form field: {name}")
        self._fields[name].value = "" if value is None else str(value)

    def touch(self, name: str) -> None:
        if name not in self._fields:
            raise KeyError(f"Unknown form field: {name}")
        self._fields[name].touched = True

    def touch_all(self) -> None:
        for state in self._fields.values():
            state.touched = True

    def errors(self, name: str) -> List[str]:
        """Error kinds the field's current value fails, in rule order."""
        value = self._fields[name].value
        return [kind for predicate, kind in self.rules[name] if not predicate(value)]

    def field_errors(self) -> Dict[str, List[str]]:
        out: Dict[str, List[str]] = {}
        for name in self._fields:
            errs = self.errors(name)
            if errs:
                out[name] = errs
        return out

    @property
    def valid(self) -> bool:
        return not self.field_errors()

    def is_valid(self, name: str) -> bool:
        """Return True when an error should be shown for ``name``.

        That is the field is invalid and has been touched. An unknown field name
        also returns True, so a typo in a caller shows up as an error.
        """
        state = self._fields.get(name)
        if state is None:
            logger.warning("is_valid called for unknown field %s", name, extra={"op": "is_valid", "status": "unknown_field"})
            return True
        return state.touched and bool(self.errors(name))

    def values(self) -> Dict[str, str]:
        return {name: state.value for name, state in self._fields.items()}

    def patch(self, record: StudentRecord) -> None:
        data = record.fields()
        for name in FIELD_NAMES:
            if name in self._fields:
                self._fields[name].value = data[name]

    def reset(self) -> None:
        for state in self._fields.values():
            state.value = ""
            state.touched = False
