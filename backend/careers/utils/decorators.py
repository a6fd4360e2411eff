from functools import wraps
from flask import g, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request


def session_matches_company(company) -> bool:
    """True when the verified token belongs to ``company``."""
    claims = get_jwt()
    return (
        company is not None
        and get_jwt_identity() == company.id
        and claims.get("company_slug") == company.slug
    )


def company_required(fn):
    """
    Require a session token for the company named in the route.

    Must run after the tenant middleware has resolved ``g.current_company``.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()

        company = getattr(g, "current_company", None)
        if not company:
            return jsonify({"error": "Company context missing"}), 400

        if not session_matches_company(company):
            return jsonify({"error": "Tenant mismatch"}), 403

        g.current_actor_id = get_jwt_identity()
        return fn(*args, **kwargs)
    return wrapper


def preview_allowed(company) -> bool:
    """
    True when the request carries a session token for ``company``.

    A missing token is not an error here; the caller answers 403.
    """
    verify_jwt_in_request(optional=True)
    if get_jwt_identity() is None:
        return False
    return session_matches_company(company)


def is_preview_request() -> bool:
    return request.args.get("preview", "").lower() in ("1", "true", "yes")
