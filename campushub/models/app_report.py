from campushub.extensions import db
from .enums import ReportCategory, ReportStatus


class AppReport(db.Model):
    __tablename__ = "app_reports"

    id = db.Column(db.Integer, primary_key=True)
    app_id = db.Column(
        db.Integer, db.ForeignKey("student_apps.id", ondelete="CASCADE"), nullable=False
    )
    reported_by = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    category = db.Column(db.Enum(ReportCategory), nullable=False)
    reason = db.Column(db.Text, nullable=False)
    status = db.Column(
        db.Enum(ReportStatus), nullable=False, default=ReportStatus.PENDING
    )
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )

    app = db.relationship("StudentApp", back_populates="reports")
    reporter = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "app_id": self.app_id,
            "app_title": self.app.title if self.app else None,
            "reported_by": self.reported_by,
            "reporter": self.reporter.to_summary() if self.reporter else None,
            "category": self.category.value,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
