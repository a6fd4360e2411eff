from flask import request, g
from werkzeug.exceptions import NotFound
from careers.models.company import Company


def tenant_middleware(app):
    @app.before_request
    def load_company():
        g.current_company = None

        slug = (request.view_args or {}).get("slug")
        if slug is None:
            return None

        company = Company.find_by_slug(slug)
        if not company:
            raise NotFound(f"No careers page for '{slug}'")

        # Attach company to global context
        g.current_company = company
        return None
