"""Field rules for task payloads.

A schema is a plain mapping of field name -> FieldRule. The validator walks
it in declaration order, so messages come back in a stable order.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class Status(Enum):
    TO_DO = "TO_DO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


DEFAULT_STATUS = Status.TO_DO
STATUS_TOKENS = tuple(s.value for s in Status)

_SEPARATORS = re.compile(r"[^a-z0-9]+")


def canonical_status(value):
    """'in progress', 'In-Progress', 'IN_PROGRESS' -> 'IN_PROGRESS'."""
    token = _SEPARATORS.sub("_", str(value).lower()).strip("_")
    return token.upper()


@dataclass(frozen=True)
class FieldRule:
    required: bool = False
    # type check; returns True when the raw value has an acceptable type
    type_check: Optional[Callable] = None
    type_message: str = ""
    transform: Optional[Callable] = None
    # domain check on the transformed value; returns an error message or None
    domain_check: Optional[Callable] = None


def _is_str(value):
    return isinstance(value, str)


def _not_blank(value):
    if not value.strip():
        return "should not be empty"
    return None


def _known_status(token):
    if token not in STATUS_TOKENS:
        return "must be one of the following values: %s (got '%s')" % (
            ", ".join(STATUS_TOKENS), token)
    return None


def _title(required):
    return FieldRule(
        required=required,
        type_check=_is_str,
        type_message="must be a string",
        domain_check=_not_blank,
    )


STATUS_RULE = FieldRule(transform=canonical_status, domain_check=_known_status)
DESCRIPTION_RULE = FieldRule(type_check=_is_str, type_message="must be a string")

CREATE_TASK = {
    "title": _title(required=True),
    "description": DESCRIPTION_RULE,
    "status": STATUS_RULE,
}

UPDATE_TASK = {
    "title": _title(required=False),
    "description": DESCRIPTION_RULE,
    "status": STATUS_RULE,
}
