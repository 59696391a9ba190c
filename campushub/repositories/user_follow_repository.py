from typing import List
from sqlalchemy.exc import IntegrityError
from campushub.extensions import db
from campushub.models import User, UserFollow


class UserFollowRepository:
    @staticmethod
    def find(follower_id: int, following_id: int):
        return UserFollow.query.filter_by(
            follower_id=follower_id, following_id=following_id
        ).first()

    @staticmethod
    def add(follower_id: int, following_id: int):
        follow = UserFollow(follower_id=follower_id, following_id=following_id)
        db.session.add(follow)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise
        return follow

    @staticmethod
    def delete(follower_id: int, following_id: int) -> bool:
        deleted = UserFollow.query.filter_by(
            follower_id=follower_id, following_id=following_id
        ).delete()
        db.session.commit()
        return deleted > 0

    @staticmethod
    def find_following(user_id: int) -> List[User]:
        return (
            db.session.query(User)
            .join(UserFollow, User.id == UserFollow.following_id)
            .filter(UserFollow.follower_id == user_id)
            .order_by(UserFollow.created_at.desc(), UserFollow.id.desc())
            .all()
        )

    @staticmethod
    def find_followers(user_id: int) -> List[User]:
        return (
            db.session.query(User)
            .join(UserFollow, User.id == UserFollow.follower_id)
            .filter(UserFollow.following_id == user_id)
            .order_by(UserFollow.created_at.desc(), UserFollow.id.desc())
            .all()
        )

    @staticmethod
    def following_ids(user_id: int) -> List[int]:
        rows = (
            db.session.query(UserFollow.following_id)
            .filter(UserFollow.follower_id == user_id)
            .all()
        )
        return [row[0] for row in rows]

    @staticmethod
    def count_following(user_id: int) -> int:
        return UserFollow.query.filter_by(follower_id=user_id).count()

    @staticmethod
    def count_followers(user_id: int) -> int:
        return UserFollow.query.filter_by(following_id=user_id).count()
