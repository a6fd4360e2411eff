from flask import g, request, jsonify
from careers.models.audit_log import AuditLog
from careers.normalizers.audit import normalize_audit_log
from careers.normalizers.pagination import normalize_pagination
from careers.utils.decorators import company_required
from careers.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp


@v1_bp.route("/companies/<slug>/audit", methods=["GET"])
@company_required
def list_audit_logs(slug):
    company = g.current_company

    query = AuditLog.query.filter(
        AuditLog.company_id == company.id
    )

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, cursor = paginate_cursor(
        query,
        model=AuditLog,
        limit=parse_limit(request.args.get("limit")),
        cursor=request.args.get("cursor"),
    )

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor)), 200
