from careers.extensions import db
from .base import BaseModel
from .company_mixin import CompanyMixin

DEFAULT_BRAND_COLOR = "#3b82f6"


class PageConfig(BaseModel, CompanyMixin):
    """
    One careers page per company.

    ``config`` is the draft block list the editor writes; ``published_config``
    is the snapshot visitors see and is only written by publish.
    """
    __tablename__ = "page_configs"

    brand_color = db.Column(db.String(32), nullable=False, default=DEFAULT_BRAND_COLOR)
    logo_url = db.Column(db.String(1024), nullable=True)
    hero_background_url = db.Column(db.String(1024), nullable=True)

    config = db.Column(db.JSON, nullable=False, default=list)
    published_config = db.Column(db.JSON(none_as_null=True), nullable=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    company = db.relationship("Company", back_populates="page_config")

    __table_args__ = (
        db.UniqueConstraint("company_id", name="uq_page_config_company"),
    )
