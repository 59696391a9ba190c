from campushub.extensions import db


class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    event_date = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    location = db.Column(db.String(255), nullable=True)
    max_attendees = db.Column(db.Integer, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    is_featured = db.Column(db.Boolean, nullable=False, default=False)
    registration_deadline = db.Column(db.TIMESTAMP(timezone=True), nullable=True)
    created_by = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    creator = db.relationship("User", backref=db.backref("events", lazy=True))
    registrations = db.relationship(
        "EventRegistration",
        back_populates="event",
        cascade="all, delete-orphan",
        lazy=True,
    )

    def to_dict(self, registrations_count=None):
        from .event_registration import EventRegistration

        if registrations_count is None:
            registrations_count = EventRegistration.query.filter_by(
                event_id=self.id
            ).count()
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "event_date": self.event_date.isoformat() if self.event_date else None,
            "location": self.location,
            "max_attendees": self.max_attendees,
            "image_url": self.image_url,
            "is_featured": self.is_featured,
            "registration_deadline": (
                self.registration_deadline.isoformat()
                if self.registration_deadline
                else None
            ),
            "created_by": self.created_by,
            "creator": self.creator.to_summary() if self.creator else None,
            "registrations_count": registrations_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"Event(id={self.id}, title='{self.title}', event_date={self.event_date})"
