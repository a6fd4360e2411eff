"""Job postings: slug derivation, visitor-side filtering and posting age."""
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Union

from dateutil.parser import isoparse

WORK_POLICIES = ("Remote", "Hybrid", "On-site")
EMPLOYMENT_TYPES = ("Full-time", "Part-time", "Contract", "Freelance")
EXPERIENCE_LEVELS = ("Entry-level", "Mid-level", "Senior", "Lead", "Executive")
JOB_TYPES = ("Permanent", "Contract", "Internship", "Temporary")

SECONDS_PER_DAY = 24 * 60 * 60

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(title: str) -> str:
    """
    >>> slugify("Senior Frontend Engineer!!")
    'senior-frontend-engineer'
    """
    slug = _NON_SLUG_CHARS.sub("", title.lower().strip())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def _as_utc(value: Union[datetime, str]) -> datetime:
    if isinstance(value, str):
        value = isoparse(value)
    # naive timestamps are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def days_since(created_at: Union[datetime, str], now: Optional[datetime] = None) -> int:
    now = _as_utc(now or datetime.now(timezone.utc))
    elapsed = abs((now - _as_utc(created_at)).total_seconds())
    return math.floor(elapsed / SECONDS_PER_DAY)


def days_ago(created_at: Union[datetime, str], now: Optional[datetime] = None) -> str:
    days = days_since(created_at, now)
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"


@dataclass(frozen=True)
class JobFilters:
    search: str = ""
    location: str = ""
    salary_range: str = ""

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "JobFilters":
        return cls(
            search=(args.get("q") or "").strip(),
            location=args.get("location") or "",
            salary_range=args.get("salary") or "",
        )

    @property
    def active(self) -> bool:
        return bool(self.search or self.location or self.salary_range)

    def matches(self, job: Mapping[str, Any]) -> bool:
        if self.search:
            needle = self.search.lower()
            haystacks = (job.get("title"), job.get("description"), job.get("department"))
            if not any(h and needle in h.lower() for h in haystacks):
                return False

        if self.location and job.get("location") != self.location:
            return False

        if self.salary_range and job.get("salary_range") != self.salary_range:
            return False

        return True


def filter_jobs(jobs: Iterable[Mapping[str, Any]], filters: JobFilters) -> List[Mapping[str, Any]]:
    return [job for job in jobs if filters.matches(job)]


def distinct_values(jobs: Iterable[Mapping[str, Any]], key: str) -> List[str]:
    return sorted({job.get(key) for job in jobs if job.get(key)})
