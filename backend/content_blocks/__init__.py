import os
from typing import Optional

from flask import Flask, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .manager import BlockManager
from .api.v1 import v1_bp
from .errors import register_error_handlers

OPENAPI_FILE = "blocks_openapi.yaml"
OPENAPI_URL = "/openapi/blocks.yaml"
SWAGGER_URL = "/swagger"


def register_api_docs(app: Flask) -> None:
    """Public OpenAPI document plus a Swagger UI pointing at it."""
    docs_dir = os.path.join(app.root_path, "api", "v1")

    @app.get(OPENAPI_URL, endpoint="openapi_blocks")
    def openapi_document():
        return send_from_directory(docs_dir, OPENAPI_FILE, mimetype="application/yaml")

    app.register_blueprint(
        get_swaggerui_blueprint(
            SWAGGER_URL,
            OPENAPI_URL,
            config={"app_name": "Content Blocks API", "deepLinking": True},
        ),
        url_prefix=SWAGGER_URL,
    )


def create_app(config_name: Optional[str] = None) -> Flask:
    config_name = config_name or os.getenv("FLASK_CONFIG", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    for extension in (db, jwt):
        extension.init_app(app)
    migrate.init_app(app, db)

    # Block types, view hooks and the publisher hang off app.extensions
    BlockManager(app)

    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_api_docs(app)

    app.logger.info("Content blocks app created (%s)", config_name)
    return app
