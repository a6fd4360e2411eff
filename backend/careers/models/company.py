from werkzeug.security import generate_password_hash, check_password_hash
from careers.extensions import db
from .base import BaseModel


class Company(BaseModel):
    __tablename__ = "companies"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    access_code_hash = db.Column(db.String(256), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    page_config = db.relationship(
        "PageConfig",
        back_populates="company",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @staticmethod
    def normalize_slug(slug: str) -> str:
        if not isinstance(slug, str):
            return ""
        return slug.strip().lower()

    def set_access_code(self, access_code: str) -> None:
        self.access_code_hash = generate_password_hash(access_code)

    def check_access_code(self, access_code: str) -> bool:
        return check_password_hash(self.access_code_hash, access_code)

    @classmethod
    def find_by_slug(cls, slug: str):
        return cls.query.filter_by(slug=cls.normalize_slug(slug), is_active=True).first()
