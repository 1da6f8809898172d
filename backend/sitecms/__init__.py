import logging
import os
import click
from flask import Flask, send_file, current_app
from flask_swagger_ui import get_swaggerui_blueprint
from .config import config_by_name, validate_config
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .store.documents import init_store


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    validate_config(app.config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # Document store + live queries
    # -------------------------------------------------
    init_store(app)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/cms.yaml", methods=["GET"], endpoint="openapi_cms")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "cms_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("cms_openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/cms.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Site CMS API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    app.logger.info(
        "Site CMS ready (app_id=%s, default site=%s)",
        app.config["APP_ID"],
        app.config["DEFAULT_SITE_ID"],
    )
    return app


def register_commands(app):
    from .domain.tenancy import sanitize_site_id
    from .models.user import User

    @app.cli.command("create-admin")
    @click.argument("site_id")
    @click.argument("email")
    @click.password_option()
    def create_admin(site_id, email, password):
        """Create an administrator account for one site."""
        site = sanitize_site_id(site_id)
        if not site:
            raise click.BadParameter("site id must contain letters, digits or hyphens")

        user = User()
        user.tenant_id = site
        user.email = email
        user.role = "admin"
        user.set_password(password)

        db.session.add(user)
        db.session.commit()
        click.echo(f"Admin {email} created for site {site}")
