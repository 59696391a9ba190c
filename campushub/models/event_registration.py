from campushub.extensions import db
from .enums import RegistrationState


class EventRegistration(db.Model):
    __tablename__ = "event_registrations"
    __table_args__ = (
        db.UniqueConstraint("event_id", "user_id", name="uq_event_registrations_event_user"),
    )

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(
        db.Integer, db.ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    check_in_code = db.Column(db.String(12), unique=True, nullable=False)
    qr_code = db.Column(db.String(64), unique=True, nullable=False)
    checked_in = db.Column(db.Boolean, nullable=False, default=False)
    checked_in_at = db.Column(db.TIMESTAMP(timezone=True), nullable=True)
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )

    event = db.relationship("Event", back_populates="registrations")
    user = db.relationship(
        "User",
        backref=db.backref("event_registrations", lazy=True),
    )

    @property
    def state(self) -> RegistrationState:
        if self.checked_in:
            return RegistrationState.CHECKED_IN
        return RegistrationState.REGISTERED

    def to_dict(self, include_credentials=False):
        data = {
            "id": self.id,
            "event_id": self.event_id,
            "user_id": self.user_id,
            "state": self.state.value,
            "checked_in": self.checked_in,
            "checked_in_at": self.checked_in_at.isoformat() if self.checked_in_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_credentials:
            data["check_in_code"] = self.check_in_code
            data["qr_code"] = self.qr_code
        return data

    def __repr__(self):
        return (
            f"EventRegistration("
            f"id={self.id}, "
            f"event_id={self.event_id}, "
            f"user_id={self.user_id}, "
            f"checked_in={self.checked_in}, "
            f"checked_in_at={self.checked_in_at}"
            f")"
        )
