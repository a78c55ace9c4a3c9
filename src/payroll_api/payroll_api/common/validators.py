from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class InputValidator:
    """Collects per-field errors over a request payload.

    Checks other than `required` skip fields that are absent, so optional
    fields are only validated when supplied.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data = dict(data or {})
        self._errors: dict[str, str] = {}

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    def is_valid(self) -> bool:
        return not self._errors

    def _present(self, field: str) -> bool:
        return field not in self._errors and not _is_blank(self._data.get(field))

    def required(self, fields: Iterable[str]) -> "InputValidator":
        for field in fields:
            if _is_blank(self._data.get(field)):
                self._errors[field] = f"{field.capitalize()} is required"
        return self

    def email(self, field: str) -> "InputValidator":
        if self._present(field) and not _EMAIL_RE.match(str(self._data[field])):
            self._errors[field] = "Invalid email format"
        return self

    def min_length(self, field: str, length: int) -> "InputValidator":
        if self._present(field) and len(str(self._data[field])) < length:
            self._errors[field] = f"{field.capitalize()} must be at least {length} characters"
        return self

    def numeric(self, field: str) -> "InputValidator":
        if self._present(field):
            try:
                float(self._data[field])
            except (TypeError, ValueError):
                self._errors[field] = f"{field.capitalize()} must be a number"
        return self

    def integer(self, field: str) -> "InputValidator":
        if self._present(field):
            value = self._data[field]
            if isinstance(value, bool):
                ok = False
            elif isinstance(value, int):
                ok = True
            else:
                text = str(value).strip()
                ok = text.isascii() and text.isdigit()
            if not ok:
                self._errors[field] = f"{field.capitalize()} must be a whole number"
        return self

    def date(self, field: str, fmt: str = "%Y-%m-%d") -> "InputValidator":
        if self._present(field):
            raw = str(self._data[field])
            try:
                ok = datetime.strptime(raw, fmt).strftime(fmt) == raw
            except ValueError:
                ok = False
            if not ok:
                self._errors[field] = f"{field.capitalize()} must be a valid date in format YYYY-MM-DD"
        return self

    def in_choices(self, field: str, choices: Iterable[str]) -> "InputValidator":
        allowed = list(choices)
        if self._present(field) and self._data[field] not in allowed:
            self._errors[field] = f"{field.capitalize()} must be one of: {', '.join(allowed)}"
        return self

    def validate(self, message: str = "Invalid input data") -> None:
        if self._errors:
            raise ValidationError(message, self._errors)
