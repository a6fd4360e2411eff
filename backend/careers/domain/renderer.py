"""
Pure mapping from a block sequence and job list to page sections.

Templates pick a partial per section; the mapping here never fails on
unexpected data, an unknown block type becomes a visible placeholder.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .blocks import AnyBlock, UnknownBlock, block_from_dict
from .invariants.exceptions import InvariantViolation
from .invariants.block import is_valid_url
from .invariants.page import safe_brand_color
from .jobs import JobFilters, days_ago, distinct_values, filter_jobs

DEFAULT_BRAND_COLOR = "#3b82f6"

SECTION_TEMPLATES = {
    "hero": "blocks/hero.html",
    "feature_split": "blocks/feature_split.html",
    "values_grid": "blocks/values_grid.html",
    "features": "blocks/features.html",
}
PLACEHOLDER_TEMPLATE = "blocks/placeholder.html"
URL_KEYS = ("backgroundImageUrl", "imageUrl")


@dataclass
class Section:
    block_id: str
    kind: str
    template: str
    data: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"block_id": self.block_id, "kind": self.kind, "data": self.data}


@dataclass
class Header:
    brand_color: str
    logo_url: str = ""
    background_url: str = ""

    @property
    def style(self) -> str:
        if self.background_url:
            return (
                f"background-image: url('{self.background_url}'); "
                "background-size: cover; background-position: center; background-repeat: no-repeat;"
            )
        if len(self.brand_color) == 7 and self.brand_color.startswith("#"):
            c = self.brand_color
            return f"background: linear-gradient(135deg, {c} 0%, {c}dd 50%, {c}aa 100%);"
        return f"background: {self.brand_color};"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "brand_color": self.brand_color,
            "logo_url": self.logo_url or None,
            "background_url": self.background_url or None,
        }


@dataclass
class JobsSection:
    jobs: List[Dict[str, Any]]
    total: int
    locations: List[str]
    salary_ranges: List[str]
    filters: JobFilters

    @property
    def summary(self) -> str:
        return f"Showing {len(self.jobs)} of {self.total} jobs"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobs": self.jobs,
            "total": self.total,
            "showing": len(self.jobs),
            "locations": self.locations,
            "salary_ranges": self.salary_ranges,
            "filters": {
                "q": self.filters.search,
                "location": self.filters.location,
                "salary": self.filters.salary_range,
            },
        }


@dataclass
class RenderedPage:
    header: Header
    sections: List[Section] = field(default_factory=list)
    jobs: Optional[JobsSection] = None
    preview: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preview": self.preview,
            "header": self.header.to_dict(),
            "sections": [s.to_dict() for s in self.sections],
            "jobs": self.jobs.to_dict() if self.jobs else None,
        }


def _safe_url(value: Optional[str]) -> str:
    return value if value and is_valid_url(value) else ""


def _scrub_urls(data: Dict[str, Any]) -> Dict[str, Any]:
    """Blank every image URL that would not pass validation; drafts may hold any text."""
    for key in URL_KEYS:
        if key in data:
            data[key] = _safe_url(data[key])
    for item in data.get("items", []):
        item["image_url"] = _safe_url(item.get("image_url"))
    return data


def _placeholder(block_id: str, block_type: Any) -> Section:
    return Section(
        block_id=block_id,
        kind="placeholder",
        template=PLACEHOLDER_TEMPLATE,
        data={"message": f"Unknown block type: {block_type}"},
    )


def render_section(raw: Any, position: int) -> Section:
    try:
        block: AnyBlock = block_from_dict(raw)
    except InvariantViolation:
        return _placeholder(f"block-{position}", type(raw).__name__)

    block_id = block.id or f"block-{position}"
    if isinstance(block, UnknownBlock):
        return _placeholder(block_id, block.type)

    return Section(
        block_id=block_id,
        kind=block.type,
        template=SECTION_TEMPLATES[block.type],
        data=_scrub_urls(block.to_dict()),
    )


def render_jobs(
    jobs: Sequence[Mapping[str, Any]],
    filters: JobFilters,
    now: Optional[datetime] = None,
) -> Optional[JobsSection]:
    if not jobs:
        return None

    visible = []
    for job in filter_jobs(jobs, filters):
        entry = dict(job)
        if job.get("created_at"):
            entry["posted"] = days_ago(job["created_at"], now)
        visible.append(entry)

    return JobsSection(
        jobs=visible,
        total=len(jobs),
        locations=distinct_values(jobs, "location"),
        salary_ranges=distinct_values(jobs, "salary_range"),
        filters=filters,
    )


def render_page(
    blocks: Sequence[Any],
    brand_color: Optional[str] = None,
    jobs: Sequence[Mapping[str, Any]] = (),
    filters: Optional[JobFilters] = None,
    *,
    logo_url: Optional[str] = None,
    background_url: Optional[str] = None,
    now: Optional[datetime] = None,
    preview: bool = False,
) -> RenderedPage:
    header = Header(
        brand_color=safe_brand_color(brand_color, DEFAULT_BRAND_COLOR),
        logo_url=_safe_url(logo_url),
        background_url=_safe_url(background_url),
    )

    return RenderedPage(
        header=header,
        sections=[render_section(raw, i) for i, raw in enumerate(blocks)],
        jobs=render_jobs(jobs, filters or JobFilters(), now),
        preview=preview,
    )
