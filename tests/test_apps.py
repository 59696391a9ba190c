import pytest


@pytest.fixture
def publish(client, auth_headers):
    def _publish(user, **fields):
        payload = {"title": "Study Buddy", "description": "Find study partners", "tags": ["python"]}
        payload.update(fields)
        response = client.post("/api/apps", json=payload, headers=auth_headers(user))
        assert response.status_code == 201
        return response.get_json()

    return _publish


def test_publish_app_awards_points(client, db, make_user, publish):
    author = make_user()

    app = publish(author, demo_url="https://buddy.example.com")

    assert app["live_url"] == "https://buddy.example.com"
    assert app["tags"] == ["python"]
    assert app["likes_count"] == 0
    db.session.refresh(author)
    assert author.total_points == 50


def test_publish_requires_title(client, make_user, auth_headers):
    response = client.post(
        "/api/apps", json={"description": "untitled"}, headers=auth_headers(make_user())
    )

    assert response.status_code == 400
    assert response.get_json()["missing_fields"] == ["title"]


def test_publish_rejects_too_many_tags(client, make_user, auth_headers):
    response = client.post(
        "/api/apps",
        json={"title": "Tagged", "tags": [f"tag{i}" for i in range(11)]},
        headers=auth_headers(make_user()),
    )

    assert response.status_code == 400


def test_restricted_user_cannot_publish(client, admin, make_user, auth_headers):
    author = make_user()
    client.post(
        f"/api/admin/users/{author.id}/restrictions",
        json={"restriction_type": "cannot_publish", "reason": "Spam submissions"},
        headers=auth_headers(admin),
    )

    response = client.post("/api/apps", json={"title": "Again"}, headers=auth_headers(author))

    assert response.status_code == 403
    assert response.get_json()["restriction_reason"] == "Spam submissions"


def test_banned_user_cannot_publish(client, make_user, auth_headers):
    banned = make_user(is_banned=True)

    response = client.post("/api/apps", json={"title": "Nope"}, headers=auth_headers(banned))

    assert response.status_code == 403
    assert "banned_reason" in response.get_json()


def test_like_is_idempotent(client, make_user, auth_headers, publish):
    app = publish(make_user())
    fan = auth_headers(make_user())

    first = client.post(f"/api/apps/{app['id']}/like", headers=fan)
    second = client.post(f"/api/apps/{app['id']}/like", headers=fan)

    assert first.get_json() == {"is_liked": True, "likes_count": 1}
    assert second.get_json() == {"is_liked": True, "likes_count": 1}

    unliked = client.delete(f"/api/apps/{app['id']}/like", headers=fan)
    again = client.delete(f"/api/apps/{app['id']}/like", headers=fan)
    assert unliked.get_json() == {"is_liked": False, "likes_count": 0}
    assert again.get_json() == {"is_liked": False, "likes_count": 0}


def test_app_detail_shows_viewer_state(client, make_user, auth_headers, publish):
    app = publish(make_user())
    viewer = make_user()
    client.post(f"/api/apps/{app['id']}/like", headers=auth_headers(viewer))
    client.put(f"/api/apps/{app['id']}/rating", json={"rating": 4}, headers=auth_headers(viewer))

    detail = client.get(f"/api/apps/{app['id']}", headers=auth_headers(viewer)).get_json()

    assert detail["is_liked"] is True
    assert detail["user_rating"] == 4
    assert detail["comments_count"] == 0


def test_rating_overwrites_previous_rating(client, make_user, auth_headers, publish):
    app = publish(make_user())
    rater = auth_headers(make_user())
    other = auth_headers(make_user())

    client.put(f"/api/apps/{app['id']}/rating", json={"rating": 2}, headers=rater)
    client.put(f"/api/apps/{app['id']}/rating", json={"rating": 5}, headers=other)
    response = client.put(f"/api/apps/{app['id']}/rating", json={"rating": 4}, headers=rater)

    body = response.get_json()
    assert body["user_rating"] == 4
    assert body["total_ratings"] == 2
    assert body["average_rating"] == 4.5


@pytest.mark.parametrize("rating", [0, 6, "five", True, None])
def test_invalid_rating(client, make_user, auth_headers, publish, rating):
    app = publish(make_user())

    response = client.put(
        f"/api/apps/{app['id']}/rating", json={"rating": rating}, headers=auth_headers(make_user())
    )

    assert response.status_code == 400


def test_comments(client, make_user, auth_headers, publish):
    author = make_user()
    commenter = make_user(full_name="Chatty")
    app = publish(author)

    created = client.post(
        f"/api/apps/{app['id']}/comments",
        json={"content": "  Nice work!  "},
        headers=auth_headers(commenter),
    )
    assert created.status_code == 201
    assert created.get_json()["content"] == "Nice work!"

    empty = client.post(
        f"/api/apps/{app['id']}/comments", json={"content": "   "}, headers=auth_headers(commenter)
    )
    assert empty.status_code == 400

    comments = client.get(f"/api/apps/{app['id']}/comments").get_json()["comments"]
    assert len(comments) == 1

    comment_id = created.get_json()["id"]
    forbidden = client.delete(
        f"/api/apps/{app['id']}/comments/{comment_id}", headers=auth_headers(make_user())
    )
    assert forbidden.status_code == 403

    deleted = client.delete(
        f"/api/apps/{app['id']}/comments/{comment_id}", headers=auth_headers(commenter)
    )
    assert deleted.status_code == 200


def test_comment_restriction(client, admin, make_user, auth_headers, publish):
    app = publish(make_user())
    muted = make_user()
    client.post(
        f"/api/admin/users/{muted.id}/restrictions",
        json={"restriction_type": "cannot_comment"},
        headers=auth_headers(admin),
    )

    response = client.post(
        f"/api/apps/{app['id']}/comments", json={"content": "hi"}, headers=auth_headers(muted)
    )

    assert response.status_code == 403


def test_report_requires_known_category(client, make_user, auth_headers, publish):
    app = publish(make_user())
    reporter = auth_headers(make_user())

    bad = client.post(
        f"/api/apps/{app['id']}/reports",
        json={"category": "boring", "reason": "meh"},
        headers=reporter,
    )
    good = client.post(
        f"/api/apps/{app['id']}/reports",
        json={"category": "Spam", "reason": "Link farm"},
        headers=reporter,
    )

    assert bad.status_code == 400
    assert good.status_code == 201
    report = good.get_json()["report"]
    assert report["category"] == "spam"
    assert report["status"] == "pending"


def test_only_owner_can_edit_or_delete(client, db, make_user, auth_headers, publish):
    author = make_user()
    app = publish(author)
    stranger = auth_headers(make_user())

    assert client.put(f"/api/apps/{app['id']}", json={"title": "x"}, headers=stranger).status_code == 403
    assert client.delete(f"/api/apps/{app['id']}", headers=stranger).status_code == 403

    updated = client.put(
        f"/api/apps/{app['id']}", json={"title": "Study Buddy 2"}, headers=auth_headers(author)
    )
    assert updated.get_json()["title"] == "Study Buddy 2"

    assert client.delete(f"/api/apps/{app['id']}", headers=auth_headers(author)).status_code == 200
    assert client.get(f"/api/apps/{app['id']}").status_code == 404
    db.session.refresh(author)
    assert author.total_points == 0


def test_list_apps(client, make_user, publish):
    publish(make_user(), title="One")
    publish(make_user(), title="Two")

    apps = client.get("/api/apps").get_json()["apps"]

    assert {a["title"] for a in apps} == {"One", "Two"}


def test_like_race_is_caught_by_unique_constraint(client, monkeypatch, make_user, auth_headers, publish):
    from campushub.models import AppLike
    from campushub.repositories import AppLikeRepository

    app = publish(make_user())
    fan = make_user()
    client.post(f"/api/apps/{app['id']}/like", headers=auth_headers(fan))

    # Pretend the earlier like is not visible yet so the insert collides
    monkeypatch.setattr(AppLikeRepository, "find", staticmethod(lambda app_id, user_id: None))
    response = client.post(f"/api/apps/{app['id']}/like", headers=auth_headers(fan))

    assert response.status_code == 200
    assert response.get_json()["likes_count"] == 1
    assert AppLike.query.filter_by(app_id=app["id"], user_id=fan.id).count() == 1


def test_search_and_tag_filters(client, make_user, publish):
    author = make_user()
    publish(author, title="Alpha", description="Notebook helper", tags=["ml"])
    publish(author, title="Beta", description="Course planner", tags=["web", "ml"])
    publish(author, title="Gamma", description="Campus map", tags=["web"])

    by_title = client.get("/api/apps?search=alpha").get_json()
    by_description = client.get("/api/apps?search=planner").get_json()
    by_tag = client.get("/api/apps?tag=web").get_json()
    combined = client.get("/api/apps?search=a&tag=ml").get_json()

    assert [a["title"] for a in by_title["apps"]] == ["Alpha"]
    assert [a["title"] for a in by_description["apps"]] == ["Beta"]
    assert {a["title"] for a in by_tag["apps"]} == {"Beta", "Gamma"}
    assert {a["title"] for a in combined["apps"]} == {"Alpha", "Beta"}


def test_popular_tags_ordered_by_use(client, make_user, publish):
    author = make_user()
    publish(author, title="One", tags=["web", "ml"])
    publish(author, title="Two", tags=["web"])
    publish(author, title="Three", tags=["web", "games"])
    publish(author, title="Four", tags=["ml"])

    popular = client.get("/api/apps").get_json()["popular_tags"]

    assert popular[:2] == ["web", "ml"]
    assert set(popular) == {"web", "ml", "games"}
