from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from campushub.extensions import db
from campushub.models import EventRegistration


class EventRegistrationRepository:
    @staticmethod
    def find_by_event_and_user(event_id: int, user_id: int) -> Optional[EventRegistration]:
        """Find a registration by event_id and user_id"""
        return EventRegistration.query.filter_by(event_id=event_id, user_id=user_id).first()

    @staticmethod
    def find_by_check_in_code(code: str) -> Optional[EventRegistration]:
        return EventRegistration.query.filter_by(check_in_code=code).first()

    @staticmethod
    def find_by_id_and_qr_code(registration_id: int, qr_code: str) -> Optional[EventRegistration]:
        return EventRegistration.query.filter_by(id=registration_id, qr_code=qr_code).first()

    @staticmethod
    def find_by_event_id(event_id: int) -> List[EventRegistration]:
        return (
            EventRegistration.query.filter_by(event_id=event_id)
            .order_by(EventRegistration.created_at.asc(), EventRegistration.id.asc())
            .all()
        )

    @staticmethod
    def registered_event_ids(user_id: int) -> List[int]:
        rows = (
            db.session.query(EventRegistration.event_id)
            .filter(EventRegistration.user_id == user_id)
            .all()
        )
        return [row[0] for row in rows]

    @staticmethod
    def count_by_event_id(event_id: int) -> int:
        return EventRegistration.query.filter_by(event_id=event_id).count()

    @staticmethod
    def count_checked_in(event_id: Optional[int] = None) -> int:
        query = EventRegistration.query.filter(EventRegistration.checked_in.is_(True))
        if event_id is not None:
            query = query.filter(EventRegistration.event_id == event_id)
        return query.count()

    @staticmethod
    def count() -> int:
        return EventRegistration.query.count()

    @staticmethod
    def register_for_event(attrs):
        """Insert a registration; the unique (event_id, user_id) index rejects duplicates."""
        registration = EventRegistration(**attrs)
        db.session.add(registration)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise
        return registration

    @staticmethod
    def delete(event_id: int, user_id: int):
        registration = EventRegistration.query.filter_by(
            event_id=event_id, user_id=user_id
        ).first()
        if registration:
            db.session.delete(registration)
            db.session.commit()
        return registration

    @staticmethod
    def mark_checked_in(registration_id: int, checked_in_at) -> bool:
        """Flip checked_in only if it is still false. Returns whether a row changed."""
        updated = (
            EventRegistration.query.filter(
                EventRegistration.id == registration_id,
                EventRegistration.checked_in.is_(False),
            ).update(
                {"checked_in": True, "checked_in_at": checked_in_at},
                synchronize_session=False,
            )
        )
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return updated == 1
