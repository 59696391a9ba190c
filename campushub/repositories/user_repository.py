from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from campushub.extensions import db
from campushub.models import User


class UserRepository:
    @staticmethod
    def sign_up(user):
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise
        return user

    @staticmethod
    def find_by_id(user_id: int) -> Optional[User]:
        return User.query.filter_by(id=user_id).first()

    @staticmethod
    def find_by_student_id(student_id: int) -> Optional[User]:
        return User.query.filter_by(student_id=student_id).first()

    @staticmethod
    def find_by_username(username: str) -> Optional[User]:
        return User.query.filter_by(username=username).first()

    @staticmethod
    def username_taken_by_other(username: str, user_id: int) -> bool:
        return (
            User.query.filter(User.username == username, User.id != user_id).first()
            is not None
        )

    @staticmethod
    def update_user(user: User, attrs: dict):
        for key, value in attrs.items():
            if hasattr(user, key):
                setattr(user, key, value)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise
        return user

    @staticmethod
    def list_users(banned: Optional[bool] = None) -> List[User]:
        query = User.query
        if banned is not None:
            query = query.filter(User.is_banned == banned)
        return query.order_by(User.created_at.desc(), User.id.desc()).all()

    @staticmethod
    def find_rankable(user_ids: Optional[List[int]] = None) -> List[User]:
        """Non-admin, non-banned users ordered by stored points."""
        query = User.query.filter(User.is_admin.is_(False), User.is_banned.is_(False))
        if user_ids is not None:
            if not user_ids:
                return []
            query = query.filter(User.id.in_(user_ids))
        return query.order_by(User.total_points.desc(), User.id.asc()).all()

    @staticmethod
    def count(banned: Optional[bool] = None) -> int:
        query = User.query
        if banned is not None:
            query = query.filter(User.is_banned == banned)
        return query.count()
