from typing import Optional
from flask import current_app
from campushub.extensions import db
from campushub.repositories import EventRepository, EventRegistrationRepository
from campushub.exceptions import (
    AlreadyCheckedInError,
    ForbiddenError,
    InvalidCredentialError,
    NotFoundError,
    ValidationError,
    WrongEventError,
)
from campushub.models import Event, EventRegistration, User
from campushub.models.enums import RegistrationState
from campushub.services.registration_lifecycle import ensure_transition
from campushub.utils.dates import utcnow
from campushub.utils.qr import parse_credential

NOT_FOUND_MESSAGES = {
    "code": "Check-in code not found",
    "qr": "QR code not found or expired",
}


class CheckInService:
    @staticmethod
    def can_manage(user: User, event: Event) -> bool:
        return bool(user and (user.is_admin or event.created_by == user.id))

    @staticmethod
    def _authorize(user: User, event: Event):
        if not CheckInService.can_manage(user, event):
            raise ForbiddenError("Only the event organizer or an admin can check attendees in")

    @staticmethod
    def verify(credential, expected_event_id: Optional[int] = None) -> EventRegistration:
        """
        Resolve a manual check-in code or a scanned QR payload to its registration.

        Manual codes are matched case-insensitively against check_in_code. QR
        payloads must match both registration_id and qr_code. When
        expected_event_id is given, a registration for any other event is
        rejected with WrongEventError.
        """
        try:
            kind, value = parse_credential(credential)
        except ValueError as e:
            raise ValidationError(str(e))

        if kind == "code":
            registration = EventRegistrationRepository.find_by_check_in_code(value)
            if registration is None:
                current_app.logger.warning("Check-in code not found")
                raise InvalidCredentialError(NOT_FOUND_MESSAGES[kind])
        else:
            registration = EventRegistrationRepository.find_by_id_and_qr_code(
                value["registration_id"], str(value["qr_code"])
            )
            if registration is None:
                current_app.logger.warning(
                    f"QR code not found for registration {value['registration_id']}"
                )
                raise InvalidCredentialError(NOT_FOUND_MESSAGES[kind])

        if expected_event_id is not None and registration.event_id != expected_event_id:
            current_app.logger.warning(
                f"Registration {registration.id} is for event {registration.event_id}, "
                f"scanned at event {expected_event_id}"
            )
            raise WrongEventError(registration)

        return registration

    @staticmethod
    def resolve(credential, actor: User, event_id: Optional[int] = None) -> EventRegistration:
        """
        Authorize the scanner and look the credential up without changing it.

        Without an event id the scanner must be an admin or organize at least
        one event, and a registration for an event they do not manage is
        reported exactly like an unknown credential.
        """
        if event_id is not None:
            event = EventRepository.get_event(event_id)
            if not event:
                raise NotFoundError(f"Event with ID {event_id} not found")
            CheckInService._authorize(actor, event)
            return CheckInService.verify(credential, expected_event_id=event_id)

        if not (actor.is_admin or EventRepository.count_by_creator(actor.id)):
            raise ForbiddenError("Only the event organizer or an admin can check attendees in")

        registration = CheckInService.verify(credential)
        if not CheckInService.can_manage(actor, registration.event):
            current_app.logger.warning(
                f"User {actor.id} presented registration {registration.id} "
                f"for event {registration.event_id} they do not manage"
            )
            kind, _ = parse_credential(credential)
            raise InvalidCredentialError(NOT_FOUND_MESSAGES[kind])
        return registration

    @staticmethod
    def check_in(credential, actor: User, event_id: Optional[int] = None) -> EventRegistration:
        registration = CheckInService.resolve(credential, actor, event_id=event_id)
        ensure_transition(registration, RegistrationState.CHECKED_IN)

        changed = EventRegistrationRepository.mark_checked_in(registration.id, utcnow())
        db.session.refresh(registration)
        if not changed:
            # Another scanner checked this registration in between lookup and update
            raise AlreadyCheckedInError(registration)

        current_app.logger.info(
            f"Checked in user {registration.user_id} to event {registration.event_id} "
            f"(registration {registration.id}) by user {actor.id}"
        )
        return registration

    @staticmethod
    def describe(registration: EventRegistration) -> dict:
        data = registration.to_dict()
        data["user"] = registration.user.to_summary() if registration.user else None
        if registration.user:
            data["user"]["student_id"] = registration.user.student_id
        data["event"] = (
            {
                "id": registration.event.id,
                "title": registration.event.title,
                "event_date": registration.event.event_date.isoformat(),
            }
            if registration.event
            else None
        )
        return data

    @staticmethod
    def attendance(event_id: int, actor: User) -> dict:
        event = EventRepository.get_event(event_id)
        if not event:
            raise NotFoundError(f"Event with ID {event_id} not found")
        CheckInService._authorize(actor, event)

        registrations = EventRegistrationRepository.find_by_event_id(event_id)
        checked_in = sum(1 for r in registrations if r.checked_in)
        return {
            "event_id": event.id,
            "title": event.title,
            "registrations_count": len(registrations),
            "checked_in_count": checked_in,
            "attendees": [CheckInService.describe(r) for r in registrations],
        }
