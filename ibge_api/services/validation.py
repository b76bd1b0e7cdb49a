"""
Declarative validation rules for the API DTOs.

Each rule set maps a field name to a list of ``(predicate, message)`` pairs.
A predicate receives the field value and returns True when the value is
acceptable. Only the ``required`` predicate rejects ``None``/blank values;
the others accept them, so a missing field reports a single message.
"""

import re
from typing import Any, Callable, Dict, List, Tuple

from pydantic import BaseModel

from ibge_api.services.errors import ValidationError

Predicate = Callable[[Any], bool]
Rule = Tuple[Predicate, str]
RuleSet = Dict[str, List[Rule]]

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def required(value: Any) -> bool:
    return not _is_blank(value)


def max_length(limit: int) -> Predicate:
    def check(value: Any) -> bool:
        return _is_blank(value) or len(value) <= limit
    return check


def is_text(value: Any) -> bool:
    """Reject strings that cannot be stored as UTF-8 (lone surrogates)."""
    if value is None:
        return True
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def max_bytes(limit: int) -> Predicate:
    def check(value: Any) -> bool:
        if _is_blank(value):
            return True
        try:
            return len(value.encode("utf-8")) <= limit
        except UnicodeEncodeError:
            # Reported by is_text
            return True
    return check


def matches(pattern: str) -> Predicate:
    # ASCII classes only: "\d" would also accept non-latin digits
    compiled = re.compile(pattern, re.ASCII)

    def check(value: Any) -> bool:
        return _is_blank(value) or compiled.fullmatch(value) is not None
    return check


def is_email(value: Any) -> bool:
    return _is_blank(value) or EMAIL_PATTERN.match(value) is not None


LOCATION_RULES: RuleSet = {
    "id": [
        (required, "The Id field is required."),
        (matches(r"[0-9]{7}"), "The Id field must be a 7-digit IBGE code."),
    ],
    "state": [
        (required, "The State field is required."),
        (matches(r"[A-Za-z]{2}"), "The State field must be a 2-letter state code."),
    ],
    "city": [
        (required, "The City field is required."),
        (max_length(80), "The City field must have at most 80 characters."),
        (is_text, "The City field contains invalid characters."),
    ],
}

USER_RULES: RuleSet = {
    "email": [
        (required, "The Email field is required."),
        (max_length(320), "The Email field must have at most 320 characters."),
        (is_email, "The Email field is not a valid e-mail address."),
        (is_text, "The Email field contains invalid characters."),
    ],
    "password": [
        (required, "The Password field is required."),
        (is_text, "The Password field contains invalid characters."),
        (max_bytes(72), "The Password field must have at most 72 bytes."),
    ],
    "name": [
        (max_length(255), "The Name field must have at most 255 characters."),
        (is_text, "The Name field contains invalid characters."),
    ],
}

CREDENTIALS_RULES: RuleSet = {
    "email": [
        (required, "The Email field is required."),
        (is_text, "The Email field contains invalid characters."),
    ],
    "password": [(required, "The Password field is required.")],
}


def collect_errors(dto: BaseModel, rules: RuleSet) -> Dict[str, List[str]]:
    """Run every rule and return the failures grouped by field."""
    errors: Dict[str, List[str]] = {}
    for field, field_rules in rules.items():
        value = getattr(dto, field, None)
        for predicate, message in field_rules:
            if not predicate(value):
                errors.setdefault(field, []).append(message)
    return errors


def validate(dto: BaseModel, rules: RuleSet) -> None:
    """
    Validate a DTO against a rule set.

    Raises:
        ValidationError: If any rule fails, with all messages per field
    """
    errors = collect_errors(dto, rules)
    if errors:
        raise ValidationError(errors)
