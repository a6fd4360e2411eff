from careers.extensions import db
from .base import BaseModel
from .company_mixin import CompanyMixin


class Job(BaseModel, CompanyMixin):
    __tablename__ = "jobs"

    title = db.Column(db.String(255), nullable=False)
    location = db.Column(db.String(255), nullable=False)
    work_policy = db.Column(db.String(32), nullable=False)  # Remote, Hybrid, On-site
    department = db.Column(db.String(255), nullable=False)
    employment_type = db.Column(db.String(32), nullable=False)
    experience_level = db.Column(db.String(32), nullable=False)
    job_type = db.Column(db.String(32), nullable=False)
    salary_range = db.Column(db.String(255), nullable=True)
    # not unique: two postings may share a slug
    job_slug = db.Column(db.String(255), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.Index("ix_jobs_company_created", "company_id", "created_at", "id"),
    )
