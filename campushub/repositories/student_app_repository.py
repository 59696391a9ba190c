from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional
from campushub.extensions import db
from campushub.models import StudentApp


class StudentAppRepository:
    @staticmethod
    def get_apps(search: Optional[str] = None, tag: Optional[str] = None) -> List[StudentApp]:
        query = StudentApp.query
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                db.or_(StudentApp.title.ilike(pattern), StudentApp.description.ilike(pattern))
            )
        apps = query.order_by(StudentApp.created_at.desc(), StudentApp.id.desc()).all()
        # tags is a JSON list; membership is checked here so SQLite and Postgres agree
        if tag:
            apps = [app for app in apps if tag in (app.tags or [])]
        return apps

    @staticmethod
    def popular_tags(limit: int = 8) -> List[str]:
        counts = Counter()
        for (tags,) in db.session.query(StudentApp.tags).all():
            counts.update(tags or [])
        return [tag for tag, _ in counts.most_common(limit)]

    @staticmethod
    def get_app(app_id: int) -> StudentApp:
        return StudentApp.query.filter_by(id=app_id).first()

    @staticmethod
    def find_by_creator(user_id: int) -> List[StudentApp]:
        return (
            StudentApp.query.filter_by(created_by=user_id)
            .order_by(StudentApp.created_at.desc(), StudentApp.id.desc())
            .all()
        )

    @staticmethod
    def create_app(attrs):
        app = StudentApp(**attrs)
        db.session.add(app)
        db.session.commit()
        return app

    @staticmethod
    def update_app(app: StudentApp, attrs: dict):
        for key, value in attrs.items():
            if hasattr(app, key):
                setattr(app, key, value)
        db.session.commit()
        return app

    @staticmethod
    def delete_app(app: StudentApp):
        db.session.delete(app)
        db.session.commit()

    @staticmethod
    def count_by_creator(user_id: int) -> int:
        return StudentApp.query.filter_by(created_by=user_id).count()

    @staticmethod
    def count() -> int:
        return StudentApp.query.count()

    @staticmethod
    def counts_by_creator(since: Optional[datetime] = None) -> Dict[int, int]:
        query = db.session.query(StudentApp.created_by, db.func.count(StudentApp.id))
        if since is not None:
            query = query.filter(StudentApp.created_at >= since)
        rows = query.group_by(StudentApp.created_by).all()
        return {user_id: count for user_id, count in rows}
