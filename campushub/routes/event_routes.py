import io
from flask import Blueprint, jsonify, request, send_file, current_app
from flask_jwt_extended import jwt_required
from campushub.exceptions import AlreadyCheckedInError, AlreadyRegisteredError, WrongEventError
from campushub.models.enums import RegistrationState
from campushub.services import CheckInService, EventService, RegistrationService
from campushub.utils.auth import get_current_user, require_user

event_bp = Blueprint("event", __name__)


@event_bp.route("/events", methods=["GET"])
@jwt_required(optional=True)
def get_all_events():
    events = EventService.list_events(
        viewer=get_current_user(), search=request.args.get("search")
    )
    return jsonify({"events": events}), 200


@event_bp.route("/events", methods=["POST"])
@jwt_required()
def create_event():
    user = require_user()
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400

    event = EventService.create_event(data, user)
    return jsonify(event.to_dict()), 201


@event_bp.route("/events/<int:event_id>", methods=["GET"])
@jwt_required(optional=True)
def get_event(event_id):
    return jsonify(EventService.get_event(event_id, viewer=get_current_user())), 200


@event_bp.route("/events/<int:event_id>", methods=["PUT"])
@jwt_required()
def update_event(event_id):
    user = require_user()
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400

    event = EventService.update_event(event_id, data, user)
    return jsonify(event.to_dict()), 200


@event_bp.route("/events/<int:event_id>", methods=["DELETE"])
@jwt_required()
def delete_event(event_id):
    user = require_user()
    EventService.delete_event(event_id, user)
    return jsonify({"message": "Event deleted successfully"}), 200


@event_bp.route("/events/<int:event_id>/register", methods=["POST"])
@jwt_required()
def register_for_event(event_id):
    user = require_user()
    try:
        registration = RegistrationService.register(event_id, user.id)
    except AlreadyRegisteredError as e:
        # A duplicate registration is benign: the caller ends up registered either way
        return (
            jsonify(
                {
                    "error": str(e),
                    "already_registered": True,
                    "state": e.registration.state.value if e.registration else None,
                }
            ),
            409,
        )

    return (
        jsonify(
            {
                "message": "Successfully registered for event",
                "state": registration.state.value,
                "registration": registration.to_dict(include_credentials=True),
            }
        ),
        201,
    )


@event_bp.route("/events/<int:event_id>/register", methods=["DELETE"])
@jwt_required()
def cancel_registration(event_id):
    user = require_user()
    was_registered = RegistrationService.unregister(event_id, user.id)
    message = (
        "Successfully cancelled registration"
        if was_registered
        else "You are not registered for this event"
    )
    return (
        jsonify(
            {
                "message": message,
                "was_registered": was_registered,
                "state": RegistrationState.UNREGISTERED.value,
            }
        ),
        200,
    )


@event_bp.route("/events/<int:event_id>/registration", methods=["GET"])
@jwt_required()
def get_registration(event_id):
    user = require_user(allow_banned=True)
    state = RegistrationService.get_state(event_id, user.id)
    if state == RegistrationState.UNREGISTERED:
        EventService.get_event_or_404(event_id)
        return jsonify({"state": state.value}), 200
    return jsonify(RegistrationService.get_credentials(event_id, user.id)), 200


@event_bp.route("/events/<int:event_id>/registration/qr.png", methods=["GET"])
@jwt_required()
def get_registration_qr(event_id):
    user = require_user(allow_banned=True)
    png = RegistrationService.get_qr_png(event_id, user.id)
    return send_file(
        io.BytesIO(png),
        mimetype="image/png",
        download_name=f"event-{event_id}-checkin.png",
    )


def _credential_from_request(data):
    if "qr" in data:
        return data["qr"]
    if "code" in data:
        return data["code"]
    return data.get("credential")


def _wrong_event_response(e, event_id):
    return (
        jsonify(
            {
                "error": str(e),
                "expected_event_id": event_id,
                "registration_event_id": e.registration.event_id if e.registration else None,
            }
        ),
        400,
    )


def _verify(event_id=None):
    actor = require_user()
    credential = _credential_from_request(request.get_json(silent=True) or {})
    if credential is None or credential == "":
        return jsonify({"error": "A check-in code or QR payload is required"}), 400

    try:
        registration = CheckInService.resolve(credential, actor, event_id=event_id)
    except WrongEventError as e:
        return _wrong_event_response(e, event_id)

    described = CheckInService.describe(registration)
    return (
        jsonify(
            {
                "state": registration.state.value,
                "can_check_in": registration.state == RegistrationState.REGISTERED,
                "registration": described,
            }
        ),
        200,
    )


def _check_in(event_id=None):
    actor = require_user()
    credential = _credential_from_request(request.get_json(silent=True) or {})
    if credential is None or credential == "":
        return jsonify({"error": "A check-in code or QR payload is required"}), 400

    try:
        registration = CheckInService.check_in(credential, actor, event_id=event_id)
    except AlreadyCheckedInError as e:
        registration = CheckInService.describe(e.registration)
        full_name = (registration.get("user") or {}).get("full_name", "Attendee")
        current_app.logger.info(
            f"Registration {e.registration.id} presented again after check-in"
        )
        return (
            jsonify(
                {
                    "error": "Already checked in",
                    "message": f"{full_name} was already checked in on {registration['checked_in_at']}",
                    "already_checked_in": True,
                    "checked_in_at": registration["checked_in_at"],
                    "registration": registration,
                }
            ),
            409,
        )
    except WrongEventError as e:
        return _wrong_event_response(e, event_id)

    described = CheckInService.describe(registration)
    full_name = (described.get("user") or {}).get("full_name", "Attendee")
    return (
        jsonify(
            {
                "message": f"{full_name} has been checked in",
                "registration": described,
            }
        ),
        200,
    )


@event_bp.route("/events/<int:event_id>/check-in", methods=["POST"])
@jwt_required()
def check_in_to_event(event_id):
    return _check_in(event_id)


@event_bp.route("/check-in", methods=["POST"])
@jwt_required()
def check_in_any_event():
    return _check_in()


@event_bp.route("/events/<int:event_id>/check-in/verify", methods=["POST"])
@jwt_required()
def verify_for_event(event_id):
    return _verify(event_id)


@event_bp.route("/check-in/verify", methods=["POST"])
@jwt_required()
def verify_any_event():
    return _verify()


@event_bp.route("/events/<int:event_id>/attendance", methods=["GET"])
@jwt_required()
def get_attendance(event_id):
    actor = require_user()
    return jsonify(CheckInService.attendance(event_id, actor)), 200
