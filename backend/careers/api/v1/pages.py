# careers/api/v1/pages.py
from flask import g, request, jsonify
from werkzeug.exceptions import NotFound
from careers.application.careers.editor import load_editor
from careers.application.careers.page_config import get_or_create_page_config
from careers.application.careers.publish_page import publish_page
from careers.application.careers.save_draft import save_draft
from careers.domain.invariants.block import validate_block
from careers.domain.invariants.exceptions import InvariantViolation
from careers.normalizers.page_config import normalize_page_config
from careers.utils.decorators import company_required
from . import v1_bp


def _check_index(editor, index):
    if not 0 <= index < len(editor.blocks):
        raise NotFound(f"No block at index {index}")


def _block_response(block, index, status=200):
    raw = block.to_dict()
    return jsonify({
        "index": index,
        "block": raw,
        "errors": [e.to_dict() for e in validate_block(raw)],
    }), status


# ------------------------
# Page document
# ------------------------

@v1_bp.route("/companies/<slug>/page", methods=["GET"])
@company_required
def get_page(slug):
    company = g.current_company
    page_config = get_or_create_page_config(company_id=company.id)
    return jsonify(normalize_page_config(page_config, admin=True))


@v1_bp.route("/companies/<slug>/page", methods=["PUT"])
@company_required
def save_page(slug):
    company = g.current_company
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return jsonify({"error": "Invalid request body"}), 400

    if not isinstance(data.get("config", []), list):
        raise InvariantViolation("config must be a list of blocks")

    page_config = save_draft(company_id=company.id, document=data)
    return jsonify(normalize_page_config(page_config, admin=True))


@v1_bp.route("/companies/<slug>/page/publish", methods=["POST"])
@company_required
def publish(slug):
    company = g.current_company
    return jsonify(publish_page(company_id=company.id))


# ------------------------
# Blocks
# ------------------------

@v1_bp.route("/companies/<slug>/page/blocks", methods=["POST"])
@company_required
def add_block(slug):
    company = g.current_company
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or not isinstance(data.get("type"), str) or not data["type"]:
        return jsonify({"error": "Block type is required"}), 400

    editor = load_editor(company_id=company.id)
    block = editor.add_block(data["type"])
    editor.save()

    return _block_response(block, len(editor.blocks) - 1, 201)


@v1_bp.route("/companies/<slug>/page/blocks/<int:index>", methods=["PUT"])
@company_required
def update_block(slug, index):
    company = g.current_company
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return jsonify({"error": "Invalid request body"}), 400

    editor = load_editor(company_id=company.id)
    _check_index(editor, index)

    current = editor.blocks[index]
    # id and type may be omitted; they default to the stored block's
    payload = {"id": current.id, "type": current.type, **data}

    block = editor.update_block(index, payload)
    editor.save()

    return _block_response(block, index)


@v1_bp.route("/companies/<slug>/page/blocks/<int:index>/move", methods=["POST"])
@company_required
def move_block(slug, index):
    company = g.current_company
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid request body"}), 400

    editor = load_editor(company_id=company.id)
    _check_index(editor, index)

    moved = editor.move_block(index, data.get("direction"))
    if moved:
        editor.save()

    return jsonify({
        "moved": moved,
        "config": [block.to_dict() for block in editor.blocks],
    })


@v1_bp.route("/companies/<slug>/page/blocks/<int:index>", methods=["DELETE"])
@company_required
def delete_block(slug, index):
    company = g.current_company

    editor = load_editor(company_id=company.id)
    _check_index(editor, index)

    removed = editor.remove_block(index)
    editor.save()

    return jsonify({
        "removed": removed.id,
        "config": [block.to_dict() for block in editor.blocks],
    })
