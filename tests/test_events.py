from datetime import datetime, timedelta, timezone


def _iso(days):
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def test_create_event_registers_organizer_and_awards_points(client, db, make_user, auth_headers):
    organizer = make_user()

    response = client.post(
        "/api/events",
        json={"title": "Hack Night", "event_date": _iso(7), "max_attendees": 30},
        headers=auth_headers(organizer),
    )

    assert response.status_code == 201
    event = response.get_json()
    assert event["registrations_count"] == 1
    assert event["is_featured"] is False

    db.session.refresh(organizer)
    assert organizer.total_points == 30

    state = client.get(
        f"/api/events/{event['id']}/registration", headers=auth_headers(organizer)
    ).get_json()
    assert state["state"] == "Registered"


def test_create_event_requires_title_and_date(client, make_user, auth_headers):
    organizer = make_user()

    response = client.post(
        "/api/events", json={"description": "no title"}, headers=auth_headers(organizer)
    )

    assert response.status_code == 400
    assert set(response.get_json()["missing_fields"]) == {"title", "event_date"}


def test_create_event_rejects_bad_date(client, make_user, auth_headers):
    organizer = make_user()

    response = client.post(
        "/api/events",
        json={"title": "Hack Night", "event_date": "next tuesday"},
        headers=auth_headers(organizer),
    )

    assert response.status_code == 400


def test_only_admin_can_feature_on_create(client, admin, make_user, auth_headers):
    student = make_user()

    by_student = client.post(
        "/api/events",
        json={"title": "A", "event_date": _iso(3), "is_featured": True},
        headers=auth_headers(student),
    ).get_json()
    by_admin = client.post(
        "/api/events",
        json={"title": "B", "event_date": _iso(3), "is_featured": True},
        headers=auth_headers(admin),
    ).get_json()

    assert by_student["is_featured"] is False
    assert by_admin["is_featured"] is True


def test_list_events_marks_viewer_registrations(client, make_user, make_event, auth_headers):
    organizer = make_user()
    viewer = make_user()
    registered = make_event(organizer, title="Registered")
    make_event(organizer, title="Not registered")
    client.post(f"/api/events/{registered.id}/register", headers=auth_headers(viewer))

    events = client.get("/api/events", headers=auth_headers(viewer)).get_json()["events"]

    flags = {e["title"]: e["is_registered"] for e in events}
    assert flags == {"Registered": True, "Not registered": False}


def test_list_events_anonymous(client, make_user, make_event):
    make_event(make_user())

    response = client.get("/api/events")

    assert response.status_code == 200
    assert "is_registered" not in response.get_json()["events"][0]


def test_register_twice_is_benign_conflict(client, make_user, make_event, auth_headers):
    event = make_event(make_user())
    student = make_user()

    first = client.post(f"/api/events/{event.id}/register", headers=auth_headers(student))
    second = client.post(f"/api/events/{event.id}/register", headers=auth_headers(student))

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.get_json()["already_registered"] is True
    assert second.get_json()["state"] == "Registered"

    detail = client.get(f"/api/events/{event.id}").get_json()
    assert detail["registrations_count"] == 1


def test_register_for_full_event(client, make_user, make_event, auth_headers):
    event = make_event(make_user(), max_attendees=1)
    client.post(f"/api/events/{event.id}/register", headers=auth_headers(make_user()))

    response = client.post(f"/api/events/{event.id}/register", headers=auth_headers(make_user()))

    assert response.status_code == 409
    assert response.get_json()["error"] == "Event is currently full"


def test_register_after_deadline(client, make_user, make_event, auth_headers):
    deadline = datetime.now(timezone.utc) - timedelta(hours=1)
    event = make_event(make_user(), registration_deadline=deadline)

    response = client.post(f"/api/events/{event.id}/register", headers=auth_headers(make_user()))

    assert response.status_code == 400
    assert response.get_json()["error"] == "Registration is closed for this event"


def test_register_for_missing_event(client, make_user, auth_headers):
    response = client.post("/api/events/999/register", headers=auth_headers(make_user()))

    assert response.status_code == 404


def test_unregister_then_register_again_issues_new_code(client, make_user, make_event, auth_headers):
    event = make_event(make_user())
    headers = auth_headers(make_user())

    first = client.post(f"/api/events/{event.id}/register", headers=headers).get_json()
    cancelled = client.delete(f"/api/events/{event.id}/register", headers=headers)
    second = client.post(f"/api/events/{event.id}/register", headers=headers)

    assert cancelled.status_code == 200
    assert cancelled.get_json()["was_registered"] is True
    assert second.status_code == 201
    assert second.get_json()["registration"]["check_in_code"] != first["registration"]["check_in_code"]


def test_unregister_when_not_registered_is_noop(client, make_user, make_event, auth_headers):
    event = make_event(make_user())

    response = client.delete(f"/api/events/{event.id}/register", headers=auth_headers(make_user()))

    assert response.status_code == 200
    body = response.get_json()
    assert body["was_registered"] is False
    assert body["state"] == "Unregistered"


def test_registration_state_for_unregistered_user(client, make_user, make_event, auth_headers):
    event = make_event(make_user())

    response = client.get(f"/api/events/{event.id}/registration", headers=auth_headers(make_user()))

    assert response.status_code == 200
    assert response.get_json() == {"state": "Unregistered"}


def test_event_detail_shows_registration_state(client, make_user, make_event, auth_headers):
    event = make_event(make_user())
    student = make_user()
    client.post(f"/api/events/{event.id}/register", headers=auth_headers(student))

    detail = client.get(f"/api/events/{event.id}", headers=auth_headers(student)).get_json()

    assert detail["registration_state"] == "Registered"
    assert detail["is_registered"] is True


def test_update_event_by_non_owner_is_forbidden(client, make_user, make_event, auth_headers):
    event = make_event(make_user())

    response = client.put(
        f"/api/events/{event.id}", json={"title": "Mine now"}, headers=auth_headers(make_user())
    )

    assert response.status_code == 403


def test_update_event_by_owner(client, make_user, make_event, auth_headers):
    organizer = make_user()
    event = make_event(organizer)

    response = client.put(
        f"/api/events/{event.id}",
        json={"title": "Hack Night II", "location": "Library"},
        headers=auth_headers(organizer),
    )

    assert response.status_code == 200
    assert response.get_json()["title"] == "Hack Night II"
    assert response.get_json()["location"] == "Library"


def test_delete_event_removes_registrations_and_points(client, db, make_user, auth_headers):
    from campushub.models import EventRegistration

    organizer = make_user()
    event = client.post(
        "/api/events",
        json={"title": "Hack Night", "event_date": _iso(7)},
        headers=auth_headers(organizer),
    ).get_json()
    client.post(f"/api/events/{event['id']}/register", headers=auth_headers(make_user()))

    response = client.delete(f"/api/events/{event['id']}", headers=auth_headers(organizer))

    assert response.status_code == 200
    assert EventRegistration.query.filter_by(event_id=event["id"]).count() == 0
    db.session.refresh(organizer)
    assert organizer.total_points == 0
    assert client.get(f"/api/events/{event['id']}").status_code == 404


def test_banned_user_cannot_register(client, make_user, make_event, auth_headers):
    event = make_event(make_user())
    banned = make_user(is_banned=True)

    response = client.post(f"/api/events/{event.id}/register", headers=auth_headers(banned))

    assert response.status_code == 403


def test_duplicate_insert_is_caught_by_unique_constraint(client, monkeypatch, make_user, make_event, auth_headers):
    from campushub.models import EventRegistration
    from campushub.services import registration_service

    event = make_event(make_user())
    student = make_user()
    headers = auth_headers(student)
    client.post(f"/api/events/{event.id}/register", headers=headers)

    # Skip the lifecycle pre-check so the second insert reaches the database
    monkeypatch.setattr(registration_service, "ensure_transition", lambda *args: None)
    response = client.post(f"/api/events/{event.id}/register", headers=headers)

    assert response.status_code == 409
    assert response.get_json()["already_registered"] is True
    assert response.get_json()["state"] == "Registered"
    assert EventRegistration.query.filter_by(event_id=event.id, user_id=student.id).count() == 1


def test_search_events(client, make_user, make_event):
    organizer = make_user()
    make_event(organizer, title="Hack Night")
    make_event(organizer, title="Career Fair")
    make_event(organizer, title="Open Mic")

    by_title = client.get("/api/events?search=hack").get_json()["events"]
    by_location = client.get("/api/events?search=engineering").get_json()["events"]
    blank = client.get("/api/events?search=").get_json()["events"]

    assert [e["title"] for e in by_title] == ["Hack Night"]
    assert len(by_location) == 3
    assert len(blank) == 3
