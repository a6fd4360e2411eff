from typing import Any, Dict
from careers.models.job import Job
from .timestamps import isoformat


def normalize_job(job: Job) -> Dict[str, Any]:
    return {
        "id": job.id,
        "company_id": job.company_id,
        "title": job.title,
        "location": job.location,
        "work_policy": job.work_policy,
        "department": job.department,
        "employment_type": job.employment_type,
        "experience_level": job.experience_level,
        "job_type": job.job_type,
        "salary_range": job.salary_range,
        "job_slug": job.job_slug,
        "description": job.description,
        "created_at": isoformat(job.created_at),
    }
