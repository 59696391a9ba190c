from campushub.extensions import db


class StudentApp(db.Model):
    __tablename__ = "student_apps"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    github_url = db.Column(db.String(500), nullable=True)
    live_url = db.Column(db.String(500), nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    tags = db.Column(db.JSON, nullable=True)
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

    creator = db.relationship("User", backref=db.backref("student_apps", lazy=True))
    likes = db.relationship("AppLike", cascade="all, delete-orphan", lazy=True)
    comments = db.relationship("AppComment", cascade="all, delete-orphan", lazy=True)
    ratings = db.relationship("AppRating", cascade="all, delete-orphan", lazy=True)
    reports = db.relationship(
        "AppReport", back_populates="app", cascade="all, delete-orphan", lazy=True
    )

    def to_dict(self, stats=None):
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "github_url": self.github_url,
            "live_url": self.live_url,
            "image_url": self.image_url,
            "tags": self.tags or [],
            "created_by": self.created_by,
            "creator": self.creator.to_summary() if self.creator else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if stats:
            data.update(stats)
        return data

    def __repr__(self):
        return f"StudentApp(id={self.id}, title='{self.title}', created_by={self.created_by})"
