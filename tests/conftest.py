from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from campushub import create_app
from campushub.extensions import db as _db
from campushub.models import Event, User

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "JWT_SECRET_KEY": "test-secret-key-with-at-least-32-bytes!!",
    "RATELIMIT_ENABLED": False,
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make(username=None, full_name=None, is_admin=False, is_banned=False,
              password="password", total_points=0):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            student_id=20240000 + n,
            username=username or f"student{n}",
            full_name=full_name or f"Student {n}",
            is_admin=is_admin,
            is_banned=is_banned,
            total_points=total_points,
        )
        user.set_password(password)
        _db.session.add(user)
        _db.session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = create_access_token(identity=str(user.id))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_event(app):
    def _make(creator, title="Hack Night", max_attendees=50, days_ahead=7,
              registration_deadline=None):
        event = Event(
            title=title,
            event_date=datetime.now(timezone.utc) + timedelta(days=days_ahead),
            location="Engineering Hall 101",
            max_attendees=max_attendees,
            registration_deadline=registration_deadline,
            created_by=creator.id,
        )
        _db.session.add(event)
        _db.session.commit()
        return event

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(username="admin", full_name="Campus Admin", is_admin=True)
