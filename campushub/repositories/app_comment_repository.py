from typing import List
from campushub.extensions import db
from campushub.models import AppComment


class AppCommentRepository:
    @staticmethod
    def list_by_app(app_id: int) -> List[AppComment]:
        return (
            AppComment.query.filter_by(app_id=app_id)
            .order_by(AppComment.created_at.desc(), AppComment.id.desc())
            .all()
        )

    @staticmethod
    def get(comment_id: int) -> AppComment:
        return AppComment.query.filter_by(id=comment_id).first()

    @staticmethod
    def add(attrs):
        comment = AppComment(**attrs)
        db.session.add(comment)
        db.session.commit()
        return comment

    @staticmethod
    def delete(comment: AppComment):
        db.session.delete(comment)
        db.session.commit()

    @staticmethod
    def count() -> int:
        return AppComment.query.count()
