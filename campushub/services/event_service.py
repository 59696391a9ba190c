from flask import current_app
from campushub.repositories import EventRepository, EventRegistrationRepository
from campushub.exceptions import (
    ForbiddenError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
)
from campushub.models import Event, User
from campushub.services.ranking_service import RankingService, EVENT_POINTS
from campushub.services.registration_service import RegistrationService
from campushub.utils.dates import parse_datetime
from typing import List, Optional

EDITABLE_FIELDS = [
    "title",
    "description",
    "event_date",
    "location",
    "max_attendees",
    "image_url",
    "registration_deadline",
]


def _parse_max_attendees(value):
    if value is None or value == "":
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError("max_attendees must be a whole number")
    if parsed < 1:
        raise ValidationError("max_attendees must be at least 1")
    return parsed


def _clean_event_attrs(data: dict) -> dict:
    attrs = {key: data[key] for key in EDITABLE_FIELDS if key in data}
    try:
        if "event_date" in attrs:
            attrs["event_date"] = parse_datetime(attrs["event_date"], "event_date")
            if attrs["event_date"] is None:
                raise ValidationError("event_date cannot be empty")
        if "registration_deadline" in attrs:
            attrs["registration_deadline"] = parse_datetime(
                attrs["registration_deadline"], "registration_deadline"
            )
    except ValueError as e:
        raise ValidationError(str(e))
    if "max_attendees" in attrs:
        attrs["max_attendees"] = _parse_max_attendees(attrs["max_attendees"])
    if "title" in attrs:
        attrs["title"] = str(attrs["title"] or "").strip()
        if not attrs["title"]:
            raise ValidationError("title cannot be empty")
    return attrs


class EventService:
    @staticmethod
    def get_event_or_404(event_id: int) -> Event:
        event = EventRepository.get_event(event_id)
        if not event:
            raise NotFoundError(f"Event with ID {event_id} not found")
        return event

    @staticmethod
    def _ensure_can_edit(event: Event, user: User):
        if not (user.is_admin or event.created_by == user.id):
            raise ForbiddenError("Unauthorized to modify this event")

    @staticmethod
    def list_events(viewer: Optional[User] = None, search: Optional[str] = None) -> List[dict]:
        events = EventRepository.get_events(search=(search or "").strip() or None)
        counts = EventRepository.registration_counts()
        registered_ids = (
            set(EventRegistrationRepository.registered_event_ids(viewer.id)) if viewer else set()
        )

        events_data = []
        for event in events:
            event_dict = event.to_dict(registrations_count=counts.get(event.id, 0))
            if viewer:
                event_dict["is_registered"] = event.id in registered_ids
            events_data.append(event_dict)
        return events_data

    @staticmethod
    def get_event(event_id: int, viewer: Optional[User] = None) -> dict:
        event = EventService.get_event_or_404(event_id)
        event_dict = event.to_dict()
        if viewer:
            event_dict["registration_state"] = RegistrationService.get_state(
                event_id, viewer.id
            ).value
            event_dict["is_registered"] = event_dict["registration_state"] != "Unregistered"
        return event_dict

    @staticmethod
    def create_event(data: dict, user: User) -> Event:
        required_fields = ["title", "event_date"]
        missing = [f for f in required_fields if not data.get(f)]
        if missing:
            raise MissingFieldsError(missing)

        attrs = _clean_event_attrs(data)
        attrs["created_by"] = user.id
        attrs["is_featured"] = bool(data.get("is_featured")) if user.is_admin else False

        deadline = attrs.get("registration_deadline")
        if deadline and deadline > attrs["event_date"]:
            raise ValidationError("registration_deadline must be before the event starts")

        event = EventRepository.create_event(attrs)
        current_app.logger.info(f"User {user.id} created event {event.id}: {event.title}")

        # Organizers attend their own events
        RegistrationService.register(event.id, user.id, enforce_limits=False)
        RankingService.adjust_points(user.id, EVENT_POINTS)
        return event

    @staticmethod
    def update_event(event_id: int, data: dict, user: User) -> Event:
        event = EventService.get_event_or_404(event_id)
        EventService._ensure_can_edit(event, user)

        attrs = _clean_event_attrs(data)
        if "is_featured" in data and user.is_admin:
            attrs["is_featured"] = bool(data["is_featured"])

        event_date = attrs.get("event_date", event.event_date)
        deadline = attrs.get("registration_deadline", event.registration_deadline)
        if deadline and event_date and parse_datetime(deadline) > parse_datetime(event_date):
            raise ValidationError("registration_deadline must be before the event starts")

        updated = EventRepository.update_event(event, attrs)
        current_app.logger.info(f"User {user.id} updated event {event_id}: {sorted(attrs)}")
        return updated

    @staticmethod
    def delete_event(event_id: int, user: User):
        event = EventService.get_event_or_404(event_id)
        EventService._ensure_can_edit(event, user)

        creator_id = event.created_by
        EventRepository.delete_event(event)
        current_app.logger.info(f"User {user.id} deleted event {event_id}")
        RankingService.adjust_points(creator_id, -EVENT_POINTS)

    @staticmethod
    def set_featured(event_id: int, is_featured: bool, admin: User) -> Event:
        event = EventService.get_event_or_404(event_id)
        if not admin.is_admin:
            raise ForbiddenError("Admin privileges required")
        updated = EventRepository.update_event(event, {"is_featured": bool(is_featured)})
        current_app.logger.info(
            f"Admin {admin.id} set is_featured={updated.is_featured} on event {event_id}"
        )
        return updated
