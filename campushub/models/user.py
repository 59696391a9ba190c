from campushub.extensions import db
from werkzeug.security import generate_password_hash, check_password_hash


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, unique=True, nullable=False)
    username = db.Column(db.String(50), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(120), nullable=False)
    major = db.Column(db.String(120), nullable=True)
    graduation_year = db.Column(db.Integer, nullable=True)
    bio = db.Column(db.Text, nullable=True)
    avatar_url = db.Column(db.String(500), nullable=True)
    github_url = db.Column(db.String(500), nullable=True)
    instagram_url = db.Column(db.String(500), nullable=True)
    facebook_url = db.Column(db.String(500), nullable=True)
    other_social_url = db.Column(db.String(500), nullable=True)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    is_banned = db.Column(db.Boolean, nullable=False, default=False)
    banned_reason = db.Column(db.Text, nullable=True)
    banned_at = db.Column(db.TIMESTAMP(timezone=True), nullable=True)
    total_points = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def set_password(self, password):
        self.password = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password, password)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, User):
            return self.id == other.id
        return False

    def __hash__(self):
        return hash(self.id)

    def to_summary(self):
        return {
            "id": self.id,
            "username": self.username,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "student_id": self.student_id,
            "username": self.username,
            "full_name": self.full_name,
            "major": self.major,
            "graduation_year": self.graduation_year,
            "bio": self.bio,
            "avatar_url": self.avatar_url,
            "github_url": self.github_url,
            "instagram_url": self.instagram_url,
            "facebook_url": self.facebook_url,
            "other_social_url": self.other_social_url,
            "is_admin": self.is_admin,
            "is_banned": self.is_banned,
            "banned_reason": self.banned_reason,
            "banned_at": self.banned_at.isoformat() if self.banned_at else None,
            "total_points": self.total_points,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return (
            f"User("
            f"id={self.id}, "
            f"student_id={self.student_id}, "
            f"username='{self.username}', "
            f"is_admin={self.is_admin}, "
            f"is_banned={self.is_banned}"
            f")"
        )
