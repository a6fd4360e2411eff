from typing import Any, Dict, Mapping
from flask import current_app
from careers.domain.blocks import ensure_block_ids, normalize_block
from careers.models.page_config import DEFAULT_BRAND_COLOR, PageConfig
from careers.utils.audit import log_action
from careers.utils.transaction import transactional
from .page_config import get_or_create_page_config


def _text_or_none(value: Any):
    return value if isinstance(value, str) and value else None


def save_draft(
    *,
    company_id: str,
    document: Mapping[str, Any],
) -> PageConfig:
    """
    Persist a whole editor document as the company's draft.

    Responsibilities:
    - Give id-less blocks a stable id
    - Normalize every block (values grid items always carry title/text/image_url)
    - Overwrite the draft slot; the published slot is untouched
    - Audit logging

    Field errors do not block a draft save. Last write wins.
    """
    config = [normalize_block(raw) for raw in ensure_block_ids(document.get("config") or [])]

    page_config = get_or_create_page_config(company_id=company_id)

    with transactional("save draft"):
        page_config.config = config
        page_config.brand_color = str(document.get("brand_color") or DEFAULT_BRAND_COLOR).strip()
        page_config.logo_url = _text_or_none(document.get("logo_url"))
        page_config.hero_background_url = _text_or_none(document.get("hero_background_url"))

        log_action(
            company_id=company_id,
            action="page.save_draft",
            entity_type="page_config",
            entity_id=page_config.id,
            payload={"blocks": len(config)},
        )

    current_app.logger.info(f"Saved draft for company {company_id} ({len(config)} blocks)")
    return page_config
