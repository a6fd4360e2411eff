from dataclasses import dataclass
from typing import List


class InvariantViolation(Exception):
    """Raised when a domain rule is broken by the caller."""


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def prefixed(self, prefix: str) -> "FieldError":
        return FieldError(f"{prefix}.{self.field}", self.message)

    def to_dict(self):
        return {"field": self.field, "message": self.message}


class FieldValidationError(InvariantViolation):
    """
    Carries every field-level error collected for one payload.

    Validation never stops at the first failure, so callers can show
    each message next to its own field.
    """

    def __init__(self, errors: List[FieldError], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = list(errors)


class BlockValidationError(FieldValidationError):
    pass


class JobValidationError(FieldValidationError):
    pass


class PersistenceError(Exception):
    """A store or storage write failed; prior persisted state is kept."""
