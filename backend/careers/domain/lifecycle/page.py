import copy
from typing import Any, Dict, List, Optional, Set

from ..blocks import load_block_list
from ..invariants.exceptions import InvariantViolation

DRAFT_ONLY = "draft_only"
PUBLISHED = "published"

# Explicit allowed state transitions
ALLOWED_PAGE_TRANSITIONS: Dict[str, Set[str]] = {
    DRAFT_ONLY: {PUBLISHED},
    PUBLISHED: {PUBLISHED},  # republish updates in place; no way back
}


def page_state(published_config: Optional[Any]) -> str:
    return DRAFT_ONLY if published_config is None else PUBLISHED


def assert_page_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards page lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_PAGE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise InvariantViolation(
            f"Illegal page transition: {from_status} → {to_status}"
        )


def publish_snapshot(draft_config: Any) -> List[Dict[str, Any]]:
    """Deep copy of the draft, so later draft edits never touch the live page."""
    return copy.deepcopy(load_block_list(draft_config))


def select_blocks(
    *,
    draft_config: Any,
    published_config: Any,
    preview: bool,
) -> List[Dict[str, Any]]:
    """
    Pick the block sequence a visitor sees.

    Preview always reads the draft. Everyone else reads the published
    snapshot, or nothing when the page was never published; drafts are
    never shown to anonymous traffic.
    """
    if preview:
        return load_block_list(draft_config)
    return load_block_list(published_config)
