from typing import Any, Dict, List, Mapping, Optional

from ..jobs import EMPLOYMENT_TYPES, EXPERIENCE_LEVELS, JOB_TYPES, WORK_POLICIES, slugify
from .exceptions import FieldError, JobValidationError

REQUIRED_TEXT_FIELDS = {
    "title": "Title",
    "location": "Location",
    "department": "Department",
}

CHOICE_FIELDS = {
    "work_policy": ("Work policy", WORK_POLICIES),
    "employment_type": ("Employment type", EMPLOYMENT_TYPES),
    "experience_level": ("Experience level", EXPERIENCE_LEVELS),
    "job_type": ("Job type", JOB_TYPES),
}

OPTIONAL_TEXT_FIELDS = ("salary_range", "description")


def _clean(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def validate_job_fields(data: Mapping[str, Any]) -> List[FieldError]:
    errors: List[FieldError] = []

    for key, label in REQUIRED_TEXT_FIELDS.items():
        if _clean(data.get(key)) is None:
            errors.append(FieldError(key, f"{label} is required"))

    for key, (label, choices) in CHOICE_FIELDS.items():
        value = data.get(key)
        if _clean(value) is None:
            errors.append(FieldError(key, f"{label} is required"))
        elif value not in choices:
            errors.append(FieldError(key, f"{label} must be one of {', '.join(choices)}"))

    if "job_slug" in data and data["job_slug"] not in (None, "") and not isinstance(data["job_slug"], str):
        errors.append(FieldError("job_slug", "Job slug must be text"))

    return errors


def build_job_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate a job form and return the columns to insert.

    ``job_slug`` is derived from the title unless one is given; a given
    slug is passed through the same slug rules. Uniqueness is not checked.
    """
    errors = validate_job_fields(data)
    if errors:
        raise JobValidationError(errors, "Invalid job")

    fields: Dict[str, Any] = {key: _clean(data[key]) for key in REQUIRED_TEXT_FIELDS}
    fields.update({key: data[key] for key in CHOICE_FIELDS})
    fields.update({key: _clean(data.get(key)) for key in OPTIONAL_TEXT_FIELDS})

    fields["job_slug"] = slugify(_clean(data.get("job_slug")) or fields["title"])
    if not fields["job_slug"]:
        raise JobValidationError(
            [FieldError("job_slug", "Job slug must contain letters or digits")],
            "Invalid job",
        )

    return fields
