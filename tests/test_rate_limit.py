import pytest

from campushub import create_app
from campushub.extensions import db as _db
from tests.conftest import TEST_CONFIG


@pytest.fixture
def limited_client():
    app = create_app({**TEST_CONFIG, "RATELIMIT_ENABLED": True, "RATELIMIT_STORAGE_URI": "memory://"})
    with app.app_context():
        _db.create_all()
        yield app.test_client()
        _db.session.remove()
        _db.drop_all()


def test_sign_in_is_rate_limited(limited_client):
    statuses = [
        limited_client.post(
            "/api/auth/signin", json={"student_id": "1", "password": "wrong"}
        ).status_code
        for _ in range(21)
    ]

    assert statuses[:20] == [401] * 20
    assert statuses[20] == 429


def test_health_check(limited_client):
    response = limited_client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
