from flask import jsonify
from careers.models.company import Company
from careers.normalizers.company import normalize_company
from . import v1_bp


@v1_bp.route("/companies", methods=["GET"])
def list_companies():
    companies = (
        Company.query
        .filter_by(is_active=True)
        .order_by(Company.name.asc())
        .all()
    )

    return jsonify({
        "items": [
            normalize_company(
                company,
                logo_url=company.page_config.logo_url if company.page_config else None,
            )
            for company in companies
        ]
    }), 200
