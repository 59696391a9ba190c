from flask import current_app
from sqlalchemy.exc import IntegrityError
from campushub.repositories import EventRepository, EventRegistrationRepository
from campushub.exceptions import (
    AlreadyRegisteredError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from campushub.models.enums import RegistrationState
from campushub.services.registration_lifecycle import ensure_transition, state_of
from campushub.utils.dates import as_utc, utcnow
from campushub.utils.qr import (
    build_qr_image_url,
    build_qr_payload,
    generate_check_in_code,
    generate_qr_token,
    render_qr_png,
)

# Attempts at drawing a fresh check-in code when a generated one collides
CREDENTIAL_ATTEMPTS = 3


class RegistrationService:
    @staticmethod
    def _get_event_or_404(event_id: int):
        event = EventRepository.get_event(event_id)
        if not event:
            raise NotFoundError(f"Event with ID {event_id} not found")
        return event

    @staticmethod
    def register(event_id: int, user_id: int, enforce_limits: bool = True):
        current_app.logger.info(f"Registration attempt: User {user_id} for event {event_id}")
        event = RegistrationService._get_event_or_404(event_id)

        existing = EventRegistrationRepository.find_by_event_and_user(event_id, user_id)
        ensure_transition(existing, RegistrationState.REGISTERED)

        if enforce_limits:
            deadline = as_utc(event.registration_deadline)
            if deadline and utcnow() > deadline:
                raise ValidationError("Registration is closed for this event")

            if event.max_attendees is not None:
                attendee_count = EventRegistrationRepository.count_by_event_id(event_id)
                if attendee_count >= event.max_attendees:
                    current_app.logger.warning(
                        f"User {user_id} blocked from registering for event {event_id} - "
                        f"event full ({attendee_count}/{event.max_attendees})"
                    )
                    raise ConflictError("Event is currently full")

        for attempt in range(CREDENTIAL_ATTEMPTS):
            try:
                registration = EventRegistrationRepository.register_for_event(
                    {
                        "event_id": event_id,
                        "user_id": user_id,
                        "check_in_code": generate_check_in_code(),
                        "qr_code": generate_qr_token(),
                        "checked_in": False,
                    }
                )
            except IntegrityError:
                # Either the (event, user) pair already exists or a credential collided
                existing = EventRegistrationRepository.find_by_event_and_user(event_id, user_id)
                if existing:
                    current_app.logger.warning(
                        f"User {user_id} already registered for event {event_id}"
                    )
                    raise AlreadyRegisteredError(existing)
                current_app.logger.warning(
                    f"Check-in credential collision for user {user_id}, event {event_id} "
                    f"(attempt {attempt + 1})"
                )
                continue

            current_app.logger.info(
                f"Successfully registered user {user_id} for event {event_id} "
                f"(registration {registration.id})"
            )
            return registration

        current_app.logger.error(
            f"Failed to register user {user_id} for event {event_id}: "
            f"could not issue unique credentials"
        )
        raise ConflictError("Registration failed. Please try again.")

    @staticmethod
    def unregister(event_id: int, user_id: int) -> bool:
        """Returns False when there was nothing to cancel."""
        RegistrationService._get_event_or_404(event_id)
        registration = EventRegistrationRepository.find_by_event_and_user(event_id, user_id)
        if registration is None:
            current_app.logger.info(
                f"User {user_id} cancelled a non-existent registration for event {event_id}"
            )
            return False

        ensure_transition(registration, RegistrationState.UNREGISTERED)
        EventRegistrationRepository.delete(event_id, user_id)
        current_app.logger.info(f"User {user_id} cancelled registration for event {event_id}")
        return True

    @staticmethod
    def get_state(event_id: int, user_id: int) -> RegistrationState:
        return state_of(EventRegistrationRepository.find_by_event_and_user(event_id, user_id))

    @staticmethod
    def get_credentials(event_id: int, user_id: int):
        RegistrationService._get_event_or_404(event_id)
        registration = EventRegistrationRepository.find_by_event_and_user(event_id, user_id)
        if registration is None:
            raise NotFoundError("You are not registered for this event")

        payload = build_qr_payload(registration)
        return {
            "state": registration.state.value,
            "registration": registration.to_dict(include_credentials=True),
            "qr_payload": payload,
            "qr_image_url": build_qr_image_url(payload),
        }

    @staticmethod
    def get_qr_png(event_id: int, user_id: int) -> bytes:
        registration = EventRegistrationRepository.find_by_event_and_user(event_id, user_id)
        if registration is None:
            raise NotFoundError("You are not registered for this event")
        return render_qr_png(build_qr_payload(registration))
