from typing import Tuple
from sqlalchemy.exc import IntegrityError
from campushub.extensions import db
from campushub.models import AppRating


class AppRatingRepository:
    @staticmethod
    def find(app_id: int, user_id: int):
        return AppRating.query.filter_by(app_id=app_id, user_id=user_id).first()

    @staticmethod
    def upsert(app_id: int, user_id: int, rating: int) -> AppRating:
        """One rating per (app_id, user_id); a second call overwrites the first."""
        existing = AppRatingRepository.find(app_id, user_id)
        if existing:
            existing.rating = rating
            db.session.commit()
            return existing

        new_rating = AppRating(app_id=app_id, user_id=user_id, rating=rating)
        db.session.add(new_rating)
        try:
            db.session.commit()
            return new_rating
        except IntegrityError:
            # A concurrent insert won; fall back to updating that row
            db.session.rollback()
            existing = AppRatingRepository.find(app_id, user_id)
            existing.rating = rating
            db.session.commit()
            return existing

    @staticmethod
    def aggregate_by_app(app_id: int) -> Tuple[float, int]:
        average, total = (
            db.session.query(db.func.avg(AppRating.rating), db.func.count(AppRating.id))
            .filter(AppRating.app_id == app_id)
            .one()
        )
        return (float(average) if average is not None else 0.0, total or 0)
