from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException
from campushub.extensions import db
from campushub.exceptions import (
    BannedUserError,
    PublishingRestrictedError,
    CheckInError,
    ConflictError,
    ForbiddenError,
    MissingFieldsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


def register_error_handlers(app):
    @app.errorhandler(MissingFieldsError)
    def handle_missing_fields(e):
        return jsonify({"error": str(e), "missing_fields": e.fields}), 400

    @app.errorhandler(ValidationError)
    def handle_validation(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(UnauthorizedError)
    def handle_unauthorized(e):
        return jsonify({"error": str(e) or "Not authenticated"}), 401

    @app.errorhandler(BannedUserError)
    def handle_banned(e):
        return (
            jsonify(
                {
                    "error": str(e),
                    "banned_reason": e.reason or "No reason provided",
                }
            ),
            403,
        )

    @app.errorhandler(PublishingRestrictedError)
    def handle_publishing_restricted(e):
        return jsonify({"error": str(e), "restriction_reason": e.reason}), 403

    @app.errorhandler(ForbiddenError)
    def handle_forbidden(e):
        return jsonify({"error": str(e)}), 403

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(ConflictError)
    def handle_conflict(e):
        return jsonify({"error": str(e)}), 409

    @app.errorhandler(CheckInError)
    def handle_check_in(e):
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        current_app.logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred"}), 500
