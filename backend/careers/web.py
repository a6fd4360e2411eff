from flask import Blueprint, abort, g, render_template, request
from careers.application.careers.public_page import build_public_page
from careers.domain.jobs import JobFilters
from careers.models.company import Company
from careers.utils.decorators import is_preview_request, preview_allowed

web_bp = Blueprint("web", __name__)


@web_bp.route("/", methods=["GET"])
def company_directory():
    companies = (
        Company.query
        .filter_by(is_active=True)
        .order_by(Company.name.asc())
        .all()
    )
    return render_template("companies.html", companies=companies)


@web_bp.route("/<slug>/careers", methods=["GET"])
@web_bp.route("/<slug>", methods=["GET"])
def careers_page(slug):
    company = g.current_company
    preview = is_preview_request()

    if preview and not preview_allowed(company):
        abort(403, description="Preview requires a session for this company")

    page = build_public_page(
        company,
        preview=preview,
        filters=JobFilters.from_args(request.args),
    )

    return render_template("page.html", company=company, page=page)
