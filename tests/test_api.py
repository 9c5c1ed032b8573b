from datetime import timedelta

from app.core.clock import utcnow
from app.models.event import EventStatus
from tests.conftest import auth_headers, make_event


def event_body(**overrides):
    now = utcnow()
    body = {
        "name": "Tree planting",
        "description": "Shovels provided",
        "date_deadline": (now + timedelta(days=1)).isoformat(),
        "start_date": (now + timedelta(days=2)).isoformat(),
        "end_date": (now + timedelta(days=3)).isoformat(),
    }
    body.update(overrides)
    return body


def test_health_and_root(client):
    assert client.get("/health").json()["database"] == "connected"
    assert client.get("/").json()["status"] == "running"


def test_signup_and_login(client):
    response = client.post(
        "/api/users",
        json={"firstname": "Ada", "lastname": "Lovelace", "username": "ada", "password": "engine42"},
    )
    assert response.status_code == 201
    assert response.json()["role"] == "USER"

    duplicate = client.post(
        "/api/users",
        json={"firstname": "Ada", "lastname": "Again", "username": "ada", "password": "engine42"},
    )
    assert duplicate.status_code == 400

    bad_login = client.post("/api/auth/login", json={"username": "ada", "password": "wrong-pass"})
    assert bad_login.status_code == 401

    login = client.post("/api/auth/login", json={"username": "ada", "password": "engine42"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["username"] == "ada"


def test_missing_or_bad_token_is_401(client):
    assert client.get("/api/events").status_code == 401

    response = client.get("/api/events", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["path"] == "/api/events"


def test_error_body_shape(client, volunteer):
    response = client.get("/api/events/999", headers=auth_headers(volunteer))

    assert response.status_code == 404
    body = response.json()
    assert body["status"] == 404
    assert body["path"] == "/api/events/999"
    assert "999" in body["message"]


def test_validation_errors_are_400(client, owner):
    response = client.post("/api/events", json=event_body(name=""), headers=auth_headers(owner))
    assert response.status_code == 400
    assert response.json()["status"] == 400

    bad_enum = client.get("/api/events?status=ARCHIVED", headers=auth_headers(owner))
    assert bad_enum.status_code == 400


def test_unsupported_method_is_405(client, owner):
    response = client.put("/api/events", json={}, headers=auth_headers(owner))
    assert response.status_code == 405


def test_event_workflow_over_http(client, owner, volunteer, admin):
    created = client.post("/api/events", json=event_body(), headers=auth_headers(owner))
    assert created.status_code == 201
    event_id = created.json()["id"]
    assert created.json()["status"] == "DRAFT"

    listed = client.get("/api/events", headers=auth_headers(volunteer)).json()
    assert listed == []

    submitted = client.post(f"/api/events/{event_id}/submit", headers=auth_headers(owner))
    assert submitted.json()["status"] == "PENDING"

    forbidden = client.post(f"/api/admin/events/{event_id}/approve", headers=auth_headers(owner))
    assert forbidden.status_code == 403

    approved = client.post(f"/api/admin/events/{event_id}/approve", headers=auth_headers(admin))
    assert approved.json()["status"] == "APPROVED"

    listed = client.get("/api/events", headers=auth_headers(volunteer)).json()
    assert [e["id"] for e in listed] == [event_id]

    joined = client.post(f"/api/registrations/{event_id}/join", headers=auth_headers(volunteer))
    assert joined.status_code == 200
    registration = joined.json()
    assert registration["status"] == "PENDING"
    assert registration["username"] == "volunteer"
    assert registration["event_name"] == "Tree planting"

    for action, expected in (("approve", "APPROVED"), ("complete", "COMPLETED")):
        response = client.post(f"/api/registrations/{registration['id']}/{action}", headers=auth_headers(owner))
        assert response.json()["status"] == expected

    cancel = client.post(f"/api/registrations/{event_id}/cancel-join", headers=auth_headers(volunteer))
    assert cancel.status_code == 400


def test_owner_update_and_delete(client, db, owner, volunteer):
    event = make_event(db, owner)

    forbidden = client.patch(f"/api/events/{event.id}", json={"name": "x"}, headers=auth_headers(volunteer))
    assert forbidden.status_code == 403

    updated = client.patch(f"/api/events/{event.id}", json={"description": "New"}, headers=auth_headers(owner))
    assert updated.json()["description"] == "New"

    assert client.delete(f"/api/events/{event.id}", headers=auth_headers(owner)).status_code == 204
    assert client.get(f"/api/events/{event.id}", headers=auth_headers(owner)).status_code == 404


def test_upload_then_post_with_media(client, db, storage_root, owner, volunteer):
    event = make_event(db, owner, status=EventStatus.APPROVED)

    upload = client.post(
        "/api/uploads",
        files={"file": ("photo.png", b"\x89PNG fake", "image/png")},
        headers=auth_headers(volunteer),
    )
    assert upload.status_code == 201
    temp_id = upload.json()["tempId"]
    assert temp_id.endswith(".png")

    created = client.post(
        f"/api/events/{event.id}/posts",
        json={"content": "Look at this", "media": [temp_id]},
        headers=auth_headers(volunteer),
    )
    assert created.status_code == 201
    post = created.json()
    assert post["media_urls"] == [f"/uploads/{event.id}/{post['id']}/{temp_id}"]
    assert (storage_root / "uploads" / str(event.id) / str(post["id"]) / temp_id).exists()

    reaction = client.put(f"/api/posts/{post['id']}/reaction", json={"type": "WOW"}, headers=auth_headers(owner))
    assert reaction.json() == {"post_id": post["id"], "type": "WOW"}

    wall = client.get(f"/api/events/{event.id}/posts", headers=auth_headers(owner)).json()
    assert wall[0]["reaction_counts"] == {"WOW": 1}


def test_upload_without_file_is_400(client, volunteer):
    response = client.post("/api/uploads", headers=auth_headers(volunteer))
    assert response.status_code == 400


def test_public_key_when_push_disabled(client):
    response = client.get("/api/webpush/public-key")
    assert response.status_code == 400
    assert response.json()["message"] == "Push notifications are disabled in configuration."


def test_upload_with_oversized_extension_is_400(client, volunteer):
    response = client.post(
        "/api/uploads",
        files={"file": ("x." + "a" * 300, b"data")},
        headers=auth_headers(volunteer),
    )

    assert response.status_code == 400
    assert response.json()["path"] == "/api/uploads"


def test_unexpected_error_is_generic_500(client, volunteer, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("database on fire")

    monkeypatch.setattr("app.services.event_service.list_events", explode)

    response = client.get("/api/events", headers=auth_headers(volunteer))

    assert response.status_code == 500
    assert response.json() == {"status": 500, "message": "Internal server error", "path": "/api/events"}
