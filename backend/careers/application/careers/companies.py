from typing import Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from careers.domain.invariants.exceptions import InvariantViolation, PersistenceError
from careers.domain.jobs import slugify
from careers.extensions import db
from careers.models.company import Company
from careers.models.page_config import DEFAULT_BRAND_COLOR, PageConfig
from careers.utils.transaction import transactional


def authenticate(*, slug: str, access_code: str) -> Optional[Company]:
    """Return the company when slug and access code match, else None."""
    if not slug or not access_code:
        return None

    company = Company.find_by_slug(slug)
    if not company or not company.check_access_code(access_code):
        current_app.logger.warning(f"Failed login for slug {Company.normalize_slug(slug)!r}")
        return None

    return company


def create_company(
    *,
    slug: str,
    name: str,
    access_code: str,
) -> Company:
    """
    Register a tenant with an empty draft page.

    Edge cases handled:
    - Slugs are lowercased and must already be URL-safe
    - Duplicate slug
    """
    slug = Company.normalize_slug(slug)
    if not slug or slugify(slug) != slug:
        raise InvariantViolation("Slug must contain only lowercase letters, digits and hyphens")
    if not name or not name.strip():
        raise InvariantViolation("Name is required")
    if not access_code:
        raise InvariantViolation("Access code is required")

    company = Company()
    company.slug = slug
    company.name = name.strip()
    company.set_access_code(access_code)

    page_config = PageConfig()
    page_config.brand_color = DEFAULT_BRAND_COLOR
    page_config.config = []
    company.page_config = page_config

    try:
        with transactional("create company"):
            db.session.add(company)
    except PersistenceError as exc:
        if isinstance(exc.__cause__, IntegrityError):
            raise InvariantViolation("A company with this slug already exists") from exc
        raise

    return company


def set_access_code(*, slug: str, access_code: str) -> Company:
    company = Company.query.filter_by(slug=Company.normalize_slug(slug)).first()
    if not company:
        raise InvariantViolation(f"Unknown company: {slug}")
    if not access_code:
        raise InvariantViolation("Access code is required")

    with transactional("update access code"):
        company.set_access_code(access_code)

    return company
