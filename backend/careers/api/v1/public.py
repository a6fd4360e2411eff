from flask import g, request, jsonify
from careers.application.careers.public_page import build_public_page
from careers.domain.jobs import JobFilters
from careers.utils.decorators import is_preview_request, preview_allowed
from . import v1_bp


@v1_bp.route("/public/<slug>/page", methods=["GET"])
def public_page(slug):
    company = g.current_company
    preview = is_preview_request()

    if preview and not preview_allowed(company):
        return jsonify({"error": "Preview requires a session for this company"}), 403

    page = build_public_page(
        company,
        preview=preview,
        filters=JobFilters.from_args(request.args),
    )

    body = page.to_dict()
    body["company"] = {"name": company.name, "slug": company.slug}
    return jsonify(body), 200
