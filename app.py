import logging
import os
from datetime import datetime, timezone

from flask import Flask, abort, jsonify, request, send_from_directory, session
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from config import Config
from utils.db import mongo, init_db_connection, ensure_indexes
from utils.exceptions import PoliceRecordsError
from utils.json_provider import MongoJSONProvider

# Import controllers
from controllers.auth_controller import auth_bp
from controllers.users_controller import users_bp
from controllers.cases_controller import cases_bp
from controllers.ob_entries_controller import ob_entries_bp
from controllers.license_plates_controller import license_plates_bp
from controllers.evidence_controller import evidence_bp
from controllers.geofiles_controller import geofiles_bp
from controllers.officers_controller import officers_bp
from controllers.profiles_controller import profiles_bp, profile_bp
from controllers.reports_controller import reports_bp
from controllers.vehicles_controller import vehicles_bp
from controllers.uploads_controller import uploads_bp

logger = logging.getLogger(__name__)

DEFAULT_SECRET = "police-management-secret-key"

# Reachable without a session
PUBLIC_ENDPOINTS = {
    "auth.login",
    "auth.register",
    "auth.logout",
    "auth.me",
    "auth.forgot_password",
    "auth.reset_password",
    "health",
}

BLUEPRINTS = (
    auth_bp, users_bp, cases_bp, ob_entries_bp, license_plates_bp,
    evidence_bp, geofiles_bp, officers_bp, profiles_bp, profile_bp,
    reports_bp, vehicles_bp, uploads_bp,
)


def configure_logging(level):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(config_object=None):
    app = Flask(__name__, static_folder=None)       # Initialize Flask app
    app.config.from_object(config_object or Config) # Load configuration
    app.json = MongoJSONProvider(app)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    if app.config["SECRET_KEY"] == DEFAULT_SECRET:
        logger.warning("SESSION_SECRET is not set, using the built-in default secret")

    init_db_connection(app)                         # Initialize MongoDB connection

    # Credentialed CORS so a separately hosted client can keep the session cookie
    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)

    # Register Blueprints
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    register_handlers(app)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        try:
            mongo.db.command("ping")
            mongodb = "connected"
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", e)
            mongodb = "disconnected"
        return jsonify({
            "status": "OK",
            "timestamp": datetime.now(timezone.utc),
            "mongodb": mongodb
        })

    if app.config.get("CLIENT_BUILD_DIR"):
        register_client(app, app.config["CLIENT_BUILD_DIR"])

    if not app.config.get("TESTING"):
        with app.app_context():
            prepare_database(app)

    return app


def prepare_database(app):
    """Indexes and sample data. Failures are logged so the server still starts."""
    try:
        ensure_indexes()
    except Exception as e:
        logger.error("Could not create MongoDB indexes: %s", e)

    if app.config.get("SEED_DATA"):
        from seeds import seed_all
        seed_all()


def register_client(app, build_dir):
    """Serve the built single-page client; unknown paths fall back to index.html."""
    build_dir = os.path.abspath(build_dir)
    logger.info("Serving client build from %s", build_dir)

    @app.route("/", defaults={"path": ""}, endpoint="client")
    @app.route("/<path:path>", endpoint="client")
    def client(path):
        if path.startswith("api/"):
            abort(404)
        if path and os.path.isfile(os.path.join(build_dir, path)):
            return send_from_directory(build_dir, path)
        return send_from_directory(build_dir, "index.html")


def register_handlers(app):

    # Global before_request: every /api route needs a session, except the auth entry points
    @app.before_request
    def require_login():
        if not request.path.startswith("/api/") or request.method == "OPTIONS":
            return None
        if request.endpoint in PUBLIC_ENDPOINTS:
            return None
        if "user_id" not in session:
            return jsonify({"message": "Authentication required"}), 401
        return None

    @app.errorhandler(PoliceRecordsError)
    def handle_police_records_error(e):
        return jsonify({"message": e.message}), e.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        limit = app.config["MAX_CONTENT_LENGTH"] // (1024 * 1024)
        return jsonify({"message": f"File too large. Maximum size is {limit}MB"}), 413

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if request.path.startswith("/api/"):
            return jsonify({"message": e.description}), e.code
        return e


# Run the app
if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"])
