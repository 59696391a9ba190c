from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv
import os
from campushub.extensions import db, migrate, jwt, limiter
from datetime import timedelta
import logging

# Load environment variables
load_dotenv()


def create_app(config_overrides=None):
    app = Flask(__name__)

    # Set testing mode from environment variable
    app.config["TESTING"] = os.getenv("FLASK_ENV") == "testing"

    # Configure logging
    logging.basicConfig(level=logging.INFO)
    app.logger.setLevel(logging.INFO)

    # Configure database
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv(
        "DATABASE_URL", "sqlite:///campushub.db"
    )
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    # Configure JWT; tokens last 7 days unless overridden
    app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", "your-secret-key")
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(
        days=int(os.getenv("JWT_ACCESS_TOKEN_DAYS", 7))
    )
    app.config["JWT_TOKEN_LOCATION"] = ["headers"]
    app.config["JWT_HEADER_NAME"] = "Authorization"
    app.config["JWT_HEADER_TYPE"] = "Bearer"

    # Rate limiting
    app.config["RATELIMIT_STORAGE_URI"] = os.getenv("LIMITER_STORAGE_URL", "memory://")
    app.config["RATELIMIT_ENABLED"] = (
        os.getenv("RATELIMIT_ENABLED", "true").lower() in ["true", "1", "t"]
    )

    # QR rendering service used for check-in credentials
    app.config["QR_SERVICE_URL"] = os.getenv(
        "QR_SERVICE_URL", "https://api.qrserver.com/v1/create-qr-code/"
    )
    app.config["QR_IMAGE_SIZE"] = os.getenv("QR_IMAGE_SIZE", "300x300")

    if config_overrides:
        app.config.update(config_overrides)

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Make sure every model is registered on the metadata
    import campushub.models  # noqa: F401

    # Register blueprints
    from campushub.routes.auth_routes import auth_bp
    from campushub.routes.user_routes import user_bp
    from campushub.routes.event_routes import event_bp
    from campushub.routes.app_routes import app_bp
    from campushub.routes.ranking_routes import ranking_bp
    from campushub.routes.admin_routes import admin_bp
    from campushub.routes.errors import register_error_handlers

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(user_bp, url_prefix="/api/users")
    app.register_blueprint(event_bp, url_prefix="/api")
    app.register_blueprint(app_bp, url_prefix="/api/apps")
    app.register_blueprint(ranking_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")
    register_error_handlers(app)

    # Set up CORS
    cors_origins = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000",
    ).split(",")
    app.logger.info(f"Initializing CORS with origins: {cors_origins}")

    CORS(
        app,
        resources={
            r"/api/*": {"origins": cors_origins},
        },
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        expose_headers=["Content-Type"],
    )

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"}), 200

    return app
