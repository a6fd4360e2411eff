import re
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urlparse

from .exceptions import BlockValidationError, FieldError

LAYOUTS = ("image_left", "image_right")

# characters that could break out of a CSS url() or an HTML attribute
UNSAFE_URL_CHARS = re.compile(r"[\s'\"()\\<>]")


def is_valid_url(value: str) -> bool:
    if not isinstance(value, str) or UNSAFE_URL_CHARS.search(value):
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _required_text(data: Mapping[str, Any], key: str, label: str) -> Optional[FieldError]:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        return FieldError(key, f"{label} is required")
    return None


def _optional_url(data: Mapping[str, Any], key: str) -> Optional[FieldError]:
    value = data.get(key)
    # Empty string means "no image"
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not is_valid_url(value):
        return FieldError(key, "Must be a valid URL")
    return None


def _collect(*results: Optional[FieldError]) -> List[FieldError]:
    return [r for r in results if r is not None]


def _validate_list(
    data: Mapping[str, Any],
    key: str,
    item_validator: Callable[[Mapping[str, Any]], List[FieldError]],
) -> List[FieldError]:
    """
    Validate every element of a nested list on its own.

    A bad element is reported under its own index and never stops
    validation of its siblings.
    """
    items = data.get(key)
    if not isinstance(items, list):
        return [FieldError(key, f"{key.capitalize()} must be a list")]

    errors: List[FieldError] = []
    for index, item in enumerate(items):
        prefix = f"{key}.{index}"
        if not isinstance(item, Mapping):
            errors.append(FieldError(prefix, "Item must be an object"))
            continue
        errors.extend(e.prefixed(prefix) for e in item_validator(item))
    return errors


def _validate_value_item(item: Mapping[str, Any]) -> List[FieldError]:
    return _collect(
        _required_text(item, "title", "Title"),
        _required_text(item, "text", "Text"),
        _optional_url(item, "image_url"),
    )


def _validate_feature_item(item: Mapping[str, Any]) -> List[FieldError]:
    return _collect(
        _required_text(item, "title", "Title"),
        _required_text(item, "description", "Description"),
    )


def _validate_hero(data: Mapping[str, Any]) -> List[FieldError]:
    return _collect(
        _required_text(data, "heading", "Heading"),
        _required_text(data, "subheading", "Subheading"),
        _optional_url(data, "backgroundImageUrl"),
    )


def _validate_feature_split(data: Mapping[str, Any]) -> List[FieldError]:
    errors = _collect(
        _required_text(data, "heading", "Heading"),
        _required_text(data, "content", "Content"),
        _optional_url(data, "imageUrl"),
    )
    if data.get("layout") not in LAYOUTS:
        errors.append(FieldError("layout", f"Layout must be one of {', '.join(LAYOUTS)}"))
    return errors


def _validate_values_grid(data: Mapping[str, Any]) -> List[FieldError]:
    return _collect(_required_text(data, "heading", "Heading")) + _validate_list(
        data, "items", _validate_value_item
    )


def _validate_features(data: Mapping[str, Any]) -> List[FieldError]:
    return _collect(_required_text(data, "heading", "Heading")) + _validate_list(
        data, "features", _validate_feature_item
    )


VALIDATORS: Dict[str, Callable[[Mapping[str, Any]], List[FieldError]]] = {
    "hero": _validate_hero,
    "feature_split": _validate_feature_split,
    "values_grid": _validate_values_grid,
    "features": _validate_features,
}


def validate_block(raw: Any) -> List[FieldError]:
    """
    Validate an untyped block against the variant named by its ``type`` tag.

    The tag alone selects the shape; a block is never tried against
    other variants. Returns every field error found, empty when valid.
    """
    if not isinstance(raw, Mapping):
        return [FieldError("type", "Block must be an object")]

    block_type = raw.get("type")
    validator = VALIDATORS.get(block_type) if isinstance(block_type, str) else None
    if validator is None:
        return [FieldError("type", f"Unknown block type: {block_type!r}")]

    errors: List[FieldError] = []
    block_id = raw.get("id")
    if not isinstance(block_id, str) or not block_id:
        errors.append(FieldError("id", "Block id is required"))

    errors.extend(validator(raw))
    return errors


def assert_block(raw: Any) -> None:
    errors = validate_block(raw)
    if errors:
        block_type = raw.get("type") if isinstance(raw, Mapping) else None
        raise BlockValidationError(errors, f"Invalid {block_type or 'unknown'} block")


def validate_blocks(raw_blocks: List[Any], prefix: str = "config") -> List[FieldError]:
    errors: List[FieldError] = []
    for index, raw in enumerate(raw_blocks):
        errors.extend(e.prefixed(f"{prefix}.{index}") for e in validate_block(raw))
    return errors
