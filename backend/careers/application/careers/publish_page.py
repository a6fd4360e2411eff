# careers/application/careers/publish_page.py
from typing import Any, Dict
from flask import current_app
from careers.domain.blocks import load_block_list
from careers.domain.invariants.page import assert_publishable
from careers.domain.lifecycle.page import PUBLISHED, assert_page_transition, page_state, publish_snapshot
from careers.models.base import utc_now
from careers.normalizers.page_config import normalize_page_config
from careers.normalizers.timestamps import isoformat
from careers.utils.audit import log_action
from careers.utils.transaction import transactional
from .page_config import get_or_create_page_config


def publish_page(
    *,
    company_id: str,
) -> Dict[str, Any]:
    """
    Copy the persisted draft into the published slot.

    Responsibilities:
    - lifecycle transition enforcement
    - refuse drafts with field errors
    - snapshot copy of the draft
    - audit logging

    Publishing an unchanged draft again writes nothing, so repeated
    publishes leave the published state identical.
    """
    page_config = get_or_create_page_config(company_id=company_id)

    assert_publishable(normalize_page_config(page_config))

    from_state = page_state(page_config.published_config)
    assert_page_transition(from_status=from_state, to_status=PUBLISHED)

    snapshot = publish_snapshot(page_config.config)

    if from_state == PUBLISHED and load_block_list(page_config.published_config) == snapshot:
        return {
            "state": PUBLISHED,
            "changed": False,
            "published_at": isoformat(page_config.published_at),
        }

    with transactional("publish page"):
        page_config.published_config = snapshot
        page_config.published_at = utc_now()

        log_action(
            company_id=company_id,
            action="page.publish",
            entity_type="page_config",
            entity_id=page_config.id,
            payload={"blocks": len(snapshot), "from_state": from_state},
        )

    current_app.logger.info(f"Published page for company {company_id} ({len(snapshot)} blocks)")

    return {
        "state": PUBLISHED,
        "changed": True,
        "published_at": isoformat(page_config.published_at),
    }
