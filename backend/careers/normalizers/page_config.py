from careers.domain.blocks import load_block_list
from careers.domain.lifecycle.page import page_state
from careers.domain.invariants.page import validate_page
from .timestamps import isoformat


def normalize_page_config(page_config, admin=False):
    """
    Editor view of a page config.

    ``admin`` adds the published snapshot, lifecycle state and the field
    errors of the current draft.
    """
    document = {
        "brand_color": page_config.brand_color,
        "logo_url": page_config.logo_url or "",
        "hero_background_url": page_config.hero_background_url or "",
        "config": load_block_list(page_config.config),
    }

    if admin:
        published = page_config.published_config
        document["published_config"] = load_block_list(published) if published is not None else None
        document["state"] = page_state(published)
        document["published_at"] = isoformat(page_config.published_at)
        document["updated_at"] = isoformat(page_config.updated_at)
        document["errors"] = [e.to_dict() for e in validate_page(document)]

    return document
