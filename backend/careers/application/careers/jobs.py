from typing import Any, Dict, List
from flask import current_app
from werkzeug.exceptions import NotFound
from careers.domain.invariants.exceptions import InvariantViolation
from careers.domain.invariants.job import build_job_fields
from careers.extensions import db
from careers.models.job import Job
from careers.utils.audit import log_action
from careers.utils.transaction import transactional


class ConfirmationRequired(InvariantViolation):
    pass


def list_jobs(*, company_id: str) -> List[Job]:
    return (
        Job.query
        .filter_by(company_id=company_id)
        .order_by(Job.created_at.desc(), Job.id.desc())
        .all()
    )


def create_job(
    *,
    company_id: str,
    data: Dict[str, Any],
) -> Job:
    """
    Create a job posting.

    Edge cases handled:
    - Missing required fields / values outside the allowed choices
    - Slug derived from the title when not given
    - Duplicate slugs are allowed
    """
    fields = build_job_fields(data)

    job = Job(**fields)
    job.company_id = company_id

    with transactional("create job"):
        db.session.add(job)
        db.session.flush()  # ensures job.id exists

        log_action(
            company_id=company_id,
            action="job.create",
            entity_type="job",
            entity_id=job.id,
            payload={"title": job.title, "job_slug": job.job_slug},
        )

    current_app.logger.info(f"Created job {job.id} ({job.job_slug}) for company {company_id}")
    return job


def delete_job(
    *,
    company_id: str,
    job_id: str,
    confirmed: bool,
) -> None:
    """Delete a job; the caller must pass an explicit confirmation."""
    if not confirmed:
        raise ConfirmationRequired("Confirmation required to delete a job")

    job = Job.query.filter_by(id=job_id, company_id=company_id).first()
    if not job:
        raise NotFound("Job not found")

    with transactional("delete job"):
        db.session.delete(job)

        log_action(
            company_id=company_id,
            action="job.delete",
            entity_type="job",
            entity_id=job_id,
            payload={"title": job.title},
        )

    current_app.logger.info(f"Deleted job {job_id} for company {company_id}")
