from typing import List
from campushub.extensions import db
from campushub.models import UserRestriction
from campushub.models.enums import RestrictionType


class UserRestrictionRepository:
    @staticmethod
    def find_active(user_id: int, restriction_type: RestrictionType):
        return UserRestriction.query.filter_by(
            user_id=user_id, restriction_type=restriction_type, is_active=True
        ).first()

    @staticmethod
    def find_by_user(user_id: int) -> List[UserRestriction]:
        return (
            UserRestriction.query.filter_by(user_id=user_id)
            .order_by(UserRestriction.created_at.desc(), UserRestriction.id.desc())
            .all()
        )

    @staticmethod
    def get(restriction_id: int) -> UserRestriction:
        return UserRestriction.query.filter_by(id=restriction_id).first()

    @staticmethod
    def add(attrs):
        restriction = UserRestriction(**attrs)
        db.session.add(restriction)
        db.session.commit()
        return restriction

    @staticmethod
    def deactivate(restriction: UserRestriction):
        restriction.is_active = False
        db.session.commit()
        return restriction
