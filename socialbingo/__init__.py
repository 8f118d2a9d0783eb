"""Initialize the Flask app and the document store gateway."""

import atexit
import json
import os

import firebase_admin
from firebase_admin import credentials, firestore
from flask import Flask

from .store import SessionStore


def _load_credentials(app):
    """Find Firebase credentials: env JSON, then a local file, then defaults."""
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path, "r") as f:
                    cred_info = json.load(f)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    # If both methods fail, fallback to default credentials
    if not cred:
        cred = credentials.ApplicationDefault()
        project_id = os.environ.get("FIREBASE_PROJECT_ID")

    return cred, project_id


def init_firebase(app):
    """Initialize the Firebase Admin SDK once per process."""
    if firebase_admin._apps:
        app.logger.info("Firebase app already initialized.")
        return
    cred, project_id = _load_credentials(app)
    options = {"projectId": project_id} if project_id else None
    firebase_admin.initialize_app(cred, options)


def create_app(test_config=None, store=None):
    """Create and configure an instance of the Flask application.

    ``store`` lets callers inject a ready-made gateway; otherwise one is built
    over the default Firestore client and released when the process exits.
    """
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        BINGO_APP_ID=os.environ.get("BINGO_APP_ID") or "default-app-id",
        STREAM_HEARTBEAT_SECONDS=float(
            os.environ.get("STREAM_HEARTBEAT_SECONDS") or 15
        ),
    )

    if test_config:
        app.config.update(test_config)

    if store is None:
        # Initialize Firebase Admin SDK only if not in testing mode
        if not app.config.get("TESTING"):
            init_firebase(app)
        store = SessionStore(firestore.client(), app.config["BINGO_APP_ID"])
        atexit.register(store.close)
    app.extensions["session_store"] = store

    # Register blueprints
    from . import game as game_bp

    app.register_blueprint(game_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    return app
