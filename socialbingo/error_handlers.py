"""Error handlers rendering JSON bodies the client can show as a banner."""

from flask import Blueprint, current_app, jsonify

from .errors import AppError, IdentityError, NotFoundError, StoreError, ValidationError

error_handlers_bp = Blueprint("error_handlers", __name__)


def _error_response(error):
    return jsonify(error=error.message, kind=error.kind), error.status_code


@error_handlers_bp.app_errorhandler(ValidationError)
def handle_validation_error(error):
    """Handles validation errors; nothing was written."""
    current_app.logger.warning(f"Validation Error: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(IdentityError)
def handle_identity_error(error):
    """Handles callers whose identity could not be verified."""
    current_app.logger.warning(f"Identity Error: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(NotFoundError)
def handle_not_found_error(error):
    """Handles not found errors."""
    current_app.logger.warning(f"Not Found Error: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(StoreError)
def handle_store_error(error):
    """Handles document store failures. The user retries by hand."""
    current_app.logger.error(f"Store Error: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles generic application errors."""
    current_app.logger.error(f"Application Error: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return jsonify(error="Not found.", kind="not_found"), 404


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return jsonify(error="Something went wrong.", kind="error"), 500
