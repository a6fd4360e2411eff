from flask import request, jsonify
from flask_jwt_extended import (
    create_access_token,
    get_jwt,
    get_jwt_identity,
    jwt_required,
)
from careers.application.careers.companies import authenticate
from . import v1_bp


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid request body"}), 400

    slug = data.get("slug")
    access_code = data.get("access_code")

    if not isinstance(slug, str) or not isinstance(access_code, str) or not slug or not access_code:
        return jsonify({"error": "Slug and access code required"}), 400

    company = authenticate(slug=slug, access_code=access_code)
    if not company:
        return jsonify({"error": "Invalid credentials"}), 401

    access_token = create_access_token(
        identity=company.id,
        additional_claims={"company_slug": company.slug},
    )

    return jsonify({
        "access_token": access_token,
        "company_id": company.id,
        "company_slug": company.slug,
    }), 200


@v1_bp.route("/auth/session", methods=["GET"])
@jwt_required()
def session():
    return jsonify({
        "company_id": get_jwt_identity(),
        "company_slug": get_jwt().get("company_slug"),
    }), 200
