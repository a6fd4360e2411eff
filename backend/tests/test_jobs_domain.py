from datetime import datetime, timedelta, timezone

import pytest

from careers.domain.invariants.exceptions import JobValidationError
from careers.domain.invariants.job import build_job_fields
from careers.domain.jobs import JobFilters, days_ago, distinct_values, filter_jobs, slugify

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)

JOBS = [
    {
        "title": "Software Engineer",
        "description": "Build the platform",
        "department": "Engineering",
        "location": "NYC",
        "salary_range": "100k-120k",
    },
    {
        "title": "Product Designer",
        "description": "Design delightful flows",
        "department": "Design",
        "location": "SF",
        "salary_range": "90k-110k",
    },
]

FORM = {
    "title": "Senior Frontend Engineer!!",
    "location": "Berlin",
    "work_policy": "Hybrid",
    "department": "Engineering",
    "employment_type": "Full-time",
    "experience_level": "Senior",
    "job_type": "Permanent",
}


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Senior Frontend Engineer!!", "senior-frontend-engineer"),
        ("  a   b  ", "a-b"),
        ("C++ / Rust -- Dev", "c-rust-dev"),
        ("Ingénieur", "ingnieur"),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def titles(jobs):
    return [job["title"] for job in jobs]


def test_search_matches_title_description_or_department():
    assert titles(filter_jobs(JOBS, JobFilters(search="engin"))) == ["Software Engineer"]
    assert titles(filter_jobs(JOBS, JobFilters(search="DELIGHTFUL"))) == ["Product Designer"]


def test_location_and_salary_are_exact():
    assert titles(filter_jobs(JOBS, JobFilters(location="SF"))) == ["Product Designer"]
    assert filter_jobs(JOBS, JobFilters(location="sf")) == []
    assert titles(filter_jobs(JOBS, JobFilters(salary_range="100k-120k"))) == ["Software Engineer"]


def test_filters_combine_with_and():
    assert filter_jobs(JOBS, JobFilters(search="engin", location="SF")) == []


def test_empty_filter_matches_everything():
    filters = JobFilters.from_args({"q": "  "})

    assert not filters.active
    assert filter_jobs(JOBS, filters) == JOBS


def test_filters_from_query_args():
    filters = JobFilters.from_args({"q": " design ", "location": "SF", "salary": "90k-110k"})

    assert filters == JobFilters(search="design", location="SF", salary_range="90k-110k")


def test_distinct_values_sorted():
    jobs = JOBS + [{"title": "Recruiter", "location": "NYC", "salary_range": None}]

    assert distinct_values(jobs, "location") == ["NYC", "SF"]
    assert distinct_values(jobs, "salary_range") == ["100k-120k", "90k-110k"]


@pytest.mark.parametrize(
    "age, expected",
    [
        (timedelta(0), "Today"),
        (timedelta(days=1) - timedelta(seconds=1), "Today"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=2, hours=23), "2 days ago"),
        (timedelta(days=30), "30 days ago"),
    ],
)
def test_days_ago_floors(age, expected):
    assert days_ago(NOW - age, NOW) == expected


def test_days_ago_accepts_iso_strings_and_naive_values():
    assert days_ago("2026-03-07T12:00:00+00:00", NOW) == "3 days ago"
    assert days_ago(datetime(2026, 3, 9, 12, 0), NOW) == "1 day ago"


def test_build_job_fields_derives_slug():
    fields = build_job_fields(FORM)

    assert fields["job_slug"] == "senior-frontend-engineer"
    assert fields["title"] == "Senior Frontend Engineer!!"
    assert fields["salary_range"] is None


def test_explicit_slug_is_slugified():
    fields = build_job_fields(dict(FORM, job_slug="Front End Role"))

    assert fields["job_slug"] == "front-end-role"


def test_build_job_fields_collects_every_error():
    form = dict(FORM, title="  ", work_policy="Sometimes", job_type=None)
    del form["department"]

    with pytest.raises(JobValidationError) as exc:
        build_job_fields(form)

    assert [e.field for e in exc.value.errors] == ["title", "department", "work_policy", "job_type"]
    assert exc.value.errors[2].message == "Work policy must be one of Remote, Hybrid, On-site"


def test_slug_without_letters_is_rejected():
    with pytest.raises(JobValidationError) as exc:
        build_job_fields(dict(FORM, title="!!!"))

    assert [e.field for e in exc.value.errors] == ["job_slug"]
