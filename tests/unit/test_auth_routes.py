"""Tests for sign in, sign out and notification history routes."""


def test_login(client, dashboard, http_session, make_http_response):
    http_session.request.return_value = make_http_response(
        200, {"message": "Login successful", "user": {"id": 1, "email": "head@school.test", "token": "tok"}}
    )

    response = client.post("/auth/login", json={"email": "head@school.test", "password": "secret"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["user"] == {"id": 1, "email": "head@school.test"}
    assert dashboard.auth.token == "tok"


def test_login_missing_fields(client, http_session):
    response = client.post("/auth/login", data={"email": "head@school.test"})
    assert response.status_code == 400
    http_session.request.assert_not_called()


def test_login_rejected(client, http_session, make_http_response):
    http_session.request.return_value = make_http_response(401, {"message": "Invalid credentials"})

    response = client.post("/auth/login", data={"email": "head@school.test", "password": "bad"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid credentials"


def test_logout_and_status(client, dashboard):
    assert client.get("/auth/status").get_json()["authenticated"] is True

    client.post("/auth/logout")

    assert client.get("/auth/status").get_json() == {"authenticated": False, "user": {}}
    assert dashboard.auth.token is None


def test_notifications_history(client, dashboard):
    dashboard.notifier.show("One", "1")
    dashboard.notifier.show("Two", "2")

    assert [t["title"] for t in client.get("/notifications").get_json()] == ["One", "Two"]
    assert [t["title"] for t in client.get("/notifications?limit=1").get_json()] == ["Two"]
