from sqlalchemy.exc import IntegrityError
from campushub.extensions import db
from campushub.models import AppLike


class AppLikeRepository:
    @staticmethod
    def find(app_id: int, user_id: int):
        return AppLike.query.filter_by(app_id=app_id, user_id=user_id).first()

    @staticmethod
    def add(app_id: int, user_id: int):
        like = AppLike(app_id=app_id, user_id=user_id)
        db.session.add(like)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise
        return like

    @staticmethod
    def delete(app_id: int, user_id: int) -> bool:
        deleted = AppLike.query.filter_by(app_id=app_id, user_id=user_id).delete()
        db.session.commit()
        return deleted > 0

    @staticmethod
    def count_by_app(app_id: int) -> int:
        return AppLike.query.filter_by(app_id=app_id).count()

    @staticmethod
    def count() -> int:
        return AppLike.query.count()
