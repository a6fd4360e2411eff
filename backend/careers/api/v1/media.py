from flask import Blueprint, g, request, jsonify, send_from_directory
from careers.utils.audit import log_action
from careers.utils.decorators import company_required
from careers.utils.media import get_storage, save_file
from careers.utils.transaction import transactional
from . import v1_bp

# Serves stored objects; registered on the app at /media
media_bp = Blueprint("media", __name__)


@v1_bp.route("/companies/<slug>/media", methods=["POST"])
@company_required
def upload_media(slug):
    company = g.current_company

    if "file" not in request.files:
        return jsonify({"error": "No file provided"}), 400

    url = save_file(request.files["file"])

    with transactional("record upload"):
        log_action(
            company_id=company.id,
            action="media.upload",
            entity_type="media",
            entity_id=company.id,
            payload={"url": url},
        )

    return jsonify({"url": url}), 201


@media_bp.route("/<path:key>", methods=["GET"])
def serve_media(key):
    return send_from_directory(get_storage().root, key)
