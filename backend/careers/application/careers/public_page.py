from datetime import datetime
from typing import Optional
from careers.domain.jobs import JobFilters
from careers.domain.lifecycle.page import select_blocks
from careers.domain.renderer import RenderedPage, render_page
from careers.models.company import Company
from careers.normalizers.job import normalize_job
from .jobs import list_jobs
from .page_config import get_page_config


def build_public_page(
    company: Company,
    *,
    preview: bool = False,
    filters: Optional[JobFilters] = None,
    now: Optional[datetime] = None,
) -> RenderedPage:
    """
    Assemble the visitor view of a company's careers page.

    Never creates a page config; a company that has not opened the editor
    yet renders the default header and no sections.
    """
    page_config = get_page_config(company_id=company.id)

    if page_config is None:
        blocks, brand_color, logo_url, background_url = [], None, None, None
    else:
        blocks = select_blocks(
            draft_config=page_config.config,
            published_config=page_config.published_config,
            preview=preview,
        )
        brand_color = page_config.brand_color
        logo_url = page_config.logo_url
        background_url = page_config.hero_background_url

    jobs = [normalize_job(job) for job in list_jobs(company_id=company.id)]

    return render_page(
        blocks,
        brand_color,
        jobs,
        filters,
        logo_url=logo_url,
        background_url=background_url,
        now=now,
        preview=preview,
    )
