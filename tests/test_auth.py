def _signup(client, **overrides):
    payload = {
        "student_id": "20251234",
        "username": "ada",
        "password": "secret-pass",
        "full_name": "Ada Lovelace",
        "major": "Computer Science",
        "graduation_year": "2027",
    }
    payload.update(overrides)
    return client.post("/api/auth/signup", json=payload)


def test_sign_up_returns_token_and_user(client):
    response = _signup(client)

    assert response.status_code == 201
    body = response.get_json()
    assert body["token"]
    assert body["user"]["username"] == "ada"
    assert body["user"]["student_id"] == 20251234
    assert body["user"]["graduation_year"] == 2027
    assert body["user"]["is_admin"] is False
    assert "password" not in body["user"]


def test_sign_up_stores_hashed_password(client, db):
    from campushub.models import User

    _signup(client)
    user = User.query.filter_by(username="ada").first()
    assert user.password != "secret-pass"
    assert user.check_password("secret-pass")


def test_sign_up_rejects_duplicate_student_id(client):
    _signup(client)
    response = _signup(client, username="someone-else")

    assert response.status_code == 409
    assert response.get_json()["error"] == "Student ID already registered"


def test_sign_up_rejects_taken_username(client):
    _signup(client)
    response = _signup(client, student_id="20259999")

    assert response.status_code == 409
    assert response.get_json()["error"] == "Username already taken"


def test_sign_up_reports_missing_fields(client):
    response = client.post("/api/auth/signup", json={"username": "ada"})

    assert response.status_code == 400
    body = response.get_json()
    assert set(body["missing_fields"]) == {"student_id", "password", "full_name"}


def test_sign_in_with_valid_credentials(client):
    _signup(client)
    response = client.post(
        "/api/auth/signin", json={"student_id": "20251234", "password": "secret-pass"}
    )

    assert response.status_code == 200
    assert response.get_json()["user"]["username"] == "ada"


def test_sign_in_uses_one_message_for_unknown_id_and_wrong_password(client):
    _signup(client)
    wrong_password = client.post(
        "/api/auth/signin", json={"student_id": "20251234", "password": "nope"}
    )
    unknown_id = client.post(
        "/api/auth/signin", json={"student_id": "11111111", "password": "secret-pass"}
    )

    assert wrong_password.status_code == 401
    assert unknown_id.status_code == 401
    assert wrong_password.get_json()["error"] == unknown_id.get_json()["error"]


def test_session_requires_token(client):
    response = client.get("/api/auth/session")

    assert response.status_code == 401


def test_session_rejects_tampered_token(client, make_user, auth_headers):
    user = make_user()
    headers = auth_headers(user)
    headers["Authorization"] = headers["Authorization"][:-4] + "abcd"

    response = client.get("/api/auth/session", headers=headers)

    assert response.status_code in (401, 422)


def test_session_returns_current_user(client, make_user, auth_headers):
    user = make_user(username="grace")

    response = client.get("/api/auth/session", headers=auth_headers(user))

    assert response.status_code == 200
    assert response.get_json()["username"] == "grace"


def test_session_reflects_ban_made_after_token_was_issued(client, db, make_user, auth_headers):
    user = make_user()
    headers = auth_headers(user)

    user.is_banned = True
    db.session.commit()

    response = client.get("/api/auth/session", headers=headers)
    assert response.get_json()["is_banned"] is True


def test_update_profile_rejects_username_of_other_user(client, make_user, auth_headers):
    make_user(username="taken")
    user = make_user(username="mine")

    response = client.put(
        "/api/users/me", json={"username": "taken"}, headers=auth_headers(user)
    )

    assert response.status_code == 409


def test_update_profile(client, make_user, auth_headers):
    user = make_user(username="mine")

    response = client.put(
        "/api/users/me",
        json={"bio": "Building things", "graduation_year": "2026", "username": "mine"},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    body = response.get_json()["user"]
    assert body["bio"] == "Building things"
    assert body["graduation_year"] == 2026


def test_public_profile_counts(client, make_user, auth_headers):
    viewer = make_user()
    target = make_user(username="target")
    client.post(f"/api/users/{target.id}/follow", headers=auth_headers(viewer))

    response = client.get("/api/users/by-username/target", headers=auth_headers(viewer))

    assert response.status_code == 200
    body = response.get_json()
    assert body["followers_count"] == 1
    assert body["following_count"] == 0
    assert body["is_following"] is True


def test_public_profile_unknown_user(client):
    response = client.get("/api/users/by-username/ghost")

    assert response.status_code == 404


def test_public_profile_lists_apps(client, make_user, auth_headers):
    author = make_user(username="maker")
    client.post("/api/apps", json={"title": "Study Buddy"}, headers=auth_headers(author))

    body = client.get("/api/users/by-username/maker").get_json()

    assert body["apps_published"] == 1
    assert [app["title"] for app in body["apps"]] == ["Study Buddy"]
    assert body["total_points"] == 50


def test_sign_up_race_on_username_is_a_conflict(client, monkeypatch):
    from campushub.repositories import UserRepository

    _signup(client)
    # Let the duplicate username slip past the pre-check
    monkeypatch.setattr(UserRepository, "find_by_username", staticmethod(lambda username: None))
    response = _signup(client, student_id="20259999")

    assert response.status_code == 409
    assert response.get_json()["error"] == "Username already taken"


def test_sign_up_race_on_student_id_is_a_conflict(client, monkeypatch):
    from campushub.repositories import UserRepository

    _signup(client)
    monkeypatch.setattr(UserRepository, "find_by_student_id", staticmethod(lambda student_id: None))
    response = _signup(client, username="someone-else")

    assert response.status_code == 409


def test_profile_update_race_on_username_is_a_conflict(client, monkeypatch, make_user, auth_headers):
    from campushub.repositories import UserRepository

    make_user(username="taken")
    user = make_user(username="mine")
    monkeypatch.setattr(
        UserRepository, "username_taken_by_other", staticmethod(lambda username, user_id: False)
    )

    response = client.put(
        "/api/users/me", json={"username": "taken"}, headers=auth_headers(user)
    )

    assert response.status_code == 409
    assert client.get("/api/users/me", headers=auth_headers(user)).get_json()["username"] == "mine"
