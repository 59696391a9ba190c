from campushub.extensions import db


class AppComment(db.Model):
    __tablename__ = "app_comments"

    id = db.Column(db.Integer, primary_key=True)
    app_id = db.Column(
        db.Integer, db.ForeignKey("student_apps.id", ondelete="CASCADE"), nullable=False
    )
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )

    user = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "app_id": self.app_id,
            "user_id": self.user_id,
            "user": self.user.to_summary() if self.user else None,
            "content": self.content,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
