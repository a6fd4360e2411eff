import re
from typing import Any, List, Mapping

from .block import is_valid_url, validate_blocks
from .exceptions import BlockValidationError, FieldError

BRAND_COLOR_RE = re.compile(r"^(#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})|[a-zA-Z]+)$")

SETTINGS_URL_FIELDS = ("logo_url", "hero_background_url")


def validate_page_settings(document: Mapping[str, Any]) -> List[FieldError]:
    errors: List[FieldError] = []

    brand_color = document.get("brand_color")
    if not isinstance(brand_color, str) or not brand_color.strip():
        errors.append(FieldError("brand_color", "Brand color is required"))
    elif not BRAND_COLOR_RE.match(brand_color.strip()):
        errors.append(FieldError("brand_color", "Brand color must be a hex color or a CSS color name"))

    for key in SETTINGS_URL_FIELDS:
        value = document.get(key)
        if value in (None, ""):
            continue
        if not isinstance(value, str) or not is_valid_url(value):
            errors.append(FieldError(key, "Must be a valid URL"))

    return errors


def validate_page(document: Mapping[str, Any]) -> List[FieldError]:
    config = document.get("config") or []
    return validate_page_settings(document) + validate_blocks(list(config))


def assert_publishable(document: Mapping[str, Any]) -> None:
    """
    Reject publishing a draft that still has field errors.

    Saving a draft only reports these errors; publishing refuses them.
    """
    errors = validate_page(document)
    if errors:
        raise BlockValidationError(errors, "Cannot publish a page with invalid fields")


def safe_brand_color(value: Any, default: str) -> str:
    if isinstance(value, str) and BRAND_COLOR_RE.match(value.strip()):
        return value.strip()
    return default
