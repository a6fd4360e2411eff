import logging
import os
from flask import Flask, send_file, current_app
from flask_swagger_ui import get_swaggerui_blueprint
from .config import DEFAULT_SECRET, config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .api.v1.media import media_bp
from .cli import register_cli
from .middleware.tenant_middleware import tenant_middleware
from .errors import register_error_handlers
from .web import web_bp


def configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)
    logging.getLogger("careers").setLevel(level)


def check_config(app: Flask, config_name: str) -> None:
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError(f"No database URI configured for '{config_name}'")

    if config_name == "production":
        for key in ("SECRET_KEY", "JWT_SECRET_KEY"):
            if app.config.get(key) in (None, "", DEFAULT_SECRET):
                raise RuntimeError(f"{key} must be set in production")


def create_app(config_name: str = "development", **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)

    configure_logging(app)
    check_config(app, config_name)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # Middleware
    # -------------------------------------------------
    tenant_middleware(app)

    # -------------------------------------------------
    # Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    app.register_blueprint(media_bp, url_prefix="/media")
    register_error_handlers(app)
    register_cli(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML (PUBLIC, NO TENANT)
    # -------------------------------------------------
    @app.route("/openapi/careers.yaml", methods=["GET"], endpoint="openapi_careers")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "careers_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("careers_openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/careers.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Careers Page Builder API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    app.register_blueprint(web_bp)

    app.logger.info(f"Careers app created with '{config_name}' config")
    return app
