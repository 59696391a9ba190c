def test_follow_and_unfollow(client, make_user, auth_headers):
    fan = make_user()
    star = make_user()

    first = client.post(f"/api/users/{star.id}/follow", headers=auth_headers(fan))
    second = client.post(f"/api/users/{star.id}/follow", headers=auth_headers(fan))

    assert first.get_json() == {"is_following": True, "followers_count": 1}
    assert second.get_json() == {"is_following": True, "followers_count": 1}

    status = client.get(f"/api/users/{star.id}/follow", headers=auth_headers(fan))
    assert status.get_json()["is_following"] is True

    removed = client.delete(f"/api/users/{star.id}/follow", headers=auth_headers(fan))
    assert removed.get_json() == {"is_following": False, "followers_count": 0}


def test_cannot_follow_self(client, make_user, auth_headers):
    user = make_user()

    response = client.post(f"/api/users/{user.id}/follow", headers=auth_headers(user))

    assert response.status_code == 400


def test_follow_unknown_user(client, make_user, auth_headers):
    response = client.post("/api/users/9999/follow", headers=auth_headers(make_user()))

    assert response.status_code == 404


def test_following_and_followers_lists(client, make_user, auth_headers):
    fan = make_user(username="fan")
    star = make_user(username="star")
    other = make_user(username="other")
    client.post(f"/api/users/{star.id}/follow", headers=auth_headers(fan))
    client.post(f"/api/users/{other.id}/follow", headers=auth_headers(fan))

    following = client.get(f"/api/users/{fan.id}/following").get_json()["following"]
    followers = client.get(f"/api/users/{star.id}/followers").get_json()["followers"]

    assert {u["username"] for u in following} == {"star", "other"}
    assert [u["username"] for u in followers] == ["fan"]


def test_follow_race_is_caught_by_unique_constraint(client, monkeypatch, make_user, auth_headers):
    from campushub.models import UserFollow
    from campushub.repositories import UserFollowRepository

    fan = make_user()
    star = make_user()
    client.post(f"/api/users/{star.id}/follow", headers=auth_headers(fan))

    real_find = UserFollowRepository.find
    calls = {"n": 0}

    def stale_find(follower_id, following_id):
        # Only the pre-insert lookup misses the existing row
        calls["n"] += 1
        return None if calls["n"] == 1 else real_find(follower_id, following_id)

    monkeypatch.setattr(UserFollowRepository, "find", staticmethod(stale_find))
    response = client.post(f"/api/users/{star.id}/follow", headers=auth_headers(fan))

    assert response.get_json() == {"is_following": True, "followers_count": 1}
    assert UserFollow.query.filter_by(follower_id=fan.id, following_id=star.id).count() == 1
