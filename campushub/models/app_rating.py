from campushub.extensions import db


class AppRating(db.Model):
    __tablename__ = "app_ratings"
    __table_args__ = (
        db.UniqueConstraint("app_id", "user_id", name="uq_app_ratings_app_user"),
        db.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_app_ratings_rating_range"),
    )

    id = db.Column(db.Integer, primary_key=True)
    app_id = db.Column(
        db.Integer, db.ForeignKey("student_apps.id", ondelete="CASCADE"), nullable=False
    )
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    rating = db.Column(db.Integer, nullable=False)
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "app_id": self.app_id,
            "user_id": self.user_id,
            "rating": self.rating,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
