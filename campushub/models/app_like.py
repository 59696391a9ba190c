from campushub.extensions import db


class AppLike(db.Model):
    __tablename__ = "app_likes"
    __table_args__ = (
        db.UniqueConstraint("app_id", "user_id", name="uq_app_likes_app_user"),
    )

    id = db.Column(db.Integer, primary_key=True)
    app_id = db.Column(
        db.Integer, db.ForeignKey("student_apps.id", ondelete="CASCADE"), nullable=False
    )
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )
