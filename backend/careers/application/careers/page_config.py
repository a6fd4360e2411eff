from careers.extensions import db
from careers.models.page_config import DEFAULT_BRAND_COLOR, PageConfig
from careers.utils.transaction import transactional


def get_page_config(*, company_id: str):
    return PageConfig.query.filter_by(company_id=company_id).first()


def get_or_create_page_config(*, company_id: str) -> PageConfig:
    """Page configs are created lazily, the first time a company's page is touched."""
    page_config = get_page_config(company_id=company_id)
    if page_config:
        return page_config

    page_config = PageConfig()
    page_config.company_id = company_id
    page_config.brand_color = DEFAULT_BRAND_COLOR
    page_config.config = []
    page_config.published_config = None

    with transactional("create page config"):
        db.session.add(page_config)

    return page_config
