from .company import Company
from .page_config import PageConfig
from .job import Job
from .audit_log import AuditLog

__all__ = ["Company", "PageConfig", "Job", "AuditLog"]
