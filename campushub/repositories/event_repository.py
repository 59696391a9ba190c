from datetime import datetime
from typing import Dict, List, Optional
from campushub.extensions import db
from campushub.models import Event, EventRegistration


class EventRepository:
    @staticmethod
    def get_events(search: Optional[str] = None) -> List[Event]:
        query = Event.query
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                db.or_(
                    Event.title.ilike(pattern),
                    Event.description.ilike(pattern),
                    Event.location.ilike(pattern),
                )
            )
        return query.order_by(Event.event_date.asc(), Event.id.asc()).all()

    @staticmethod
    def get_event(event_id: int) -> Event:
        return Event.query.filter_by(id=event_id).first()

    @staticmethod
    def create_event(attrs):
        event = Event(**attrs)
        db.session.add(event)
        db.session.commit()
        return event

    @staticmethod
    def update_event(event: Event, attrs: dict):
        for key, value in attrs.items():
            if hasattr(event, key):
                setattr(event, key, value)
        db.session.commit()
        return event

    @staticmethod
    def delete_event(event: Event):
        db.session.delete(event)
        db.session.commit()

    @staticmethod
    def count_by_creator(user_id: int) -> int:
        return Event.query.filter_by(created_by=user_id).count()

    @staticmethod
    def count() -> int:
        return Event.query.count()

    @staticmethod
    def registration_counts() -> Dict[int, int]:
        rows = (
            db.session.query(EventRegistration.event_id, db.func.count(EventRegistration.id))
            .group_by(EventRegistration.event_id)
            .all()
        )
        return {event_id: count for event_id, count in rows}

    @staticmethod
    def counts_by_creator(since: Optional[datetime] = None) -> Dict[int, int]:
        query = db.session.query(Event.created_by, db.func.count(Event.id))
        if since is not None:
            query = query.filter(Event.created_at >= since)
        rows = query.group_by(Event.created_by).all()
        return {user_id: count for user_id, count in rows}
