from flask import jsonify, render_template, request
from werkzeug.exceptions import HTTPException, NotFound
from careers.domain.invariants.exceptions import (
    FieldValidationError,
    InvariantViolation,
    PersistenceError,
)


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(FieldValidationError)
    def handle_field_validation(error):
        response = jsonify({
            "error": "ValidationError",
            "message": str(error),
            "fields": [e.to_dict() for e in error.errors],
        })
        response.status_code = 422
        return response

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(error):
        app.logger.exception(f"Persistence failure on {request.method} {request.path}")
        response = jsonify({
            "error": "PersistenceError",
            "message": str(error)
        })
        response.status_code = 503
        return response

    @app.errorhandler(NotFound)
    def handle_not_found(error):
        if _wants_json():
            return jsonify({"error": "NotFound", "message": error.description}), 404
        return render_template("404.html", message=error.description), 404

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if not _wants_json():
            return error
        response = jsonify({"error": error.name, "message": error.description})
        response.status_code = error.code
        return response
