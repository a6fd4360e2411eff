from careers.extensions import db


class CompanyMixin:
    company_id = db.Column(
        db.String(36),
        db.ForeignKey("companies.id"),
        nullable=False,
        index=True
    )
