import logging

from csrf_guard.config import settings


def test_form_page_embeds_token(client, page_token):
    r = client.get("/form")
    assert r.status_code == 200
    token = page_token(r.text)
    # meta tag carries the same token for fetch/htmx clients
    assert f'<meta name="csrf-token" content="{token}">' in r.text
    assert r.cookies.get(settings.CSRF_COOKIE_NAME).startswith(token + "|")


def test_form_submit_missing_token(client):
    # No cookie, no field → forbidden (403)
    r = client.post("/form", data={"message": "hi"})
    assert r.status_code == 403
    assert r.json() == {"error": "CSRF token invalid", "status": 403, "path": "/form"}


def test_form_submit_with_valid_token(client, page_token):
    r_get = client.get("/form")
    token = page_token(r_get.text)

    r_post = client.post("/form", data={"message": "hello", settings.CSRF_FORM_FIELD: token})
    assert r_post.status_code == 200
    assert "Submitted: hello" in r_post.text
    # same token keeps working on the re-rendered page
    assert page_token(r_post.text) == token


def test_form_submit_with_header(client, page_token):
    token = page_token(client.get("/form").text)
    r = client.post(
        "/form",
        data={"message": "via header"},
        headers={settings.CSRF_HEADER_NAME: token},
    )
    assert r.status_code == 200


def test_form_submit_wrong_token(client, page_token):
    page_token(client.get("/form").text)
    r = client.post("/form", data={"message": "x", settings.CSRF_FORM_FIELD: "not-the-token"})
    assert r.status_code == 403


def test_form_submit_digest_as_token(client):
    r_get = client.get("/form")
    _, digest = r_get.cookies.get(settings.CSRF_COOKIE_NAME).split("|")
    r = client.post("/form", data={"message": "x", settings.CSRF_FORM_FIELD: digest})
    assert r.status_code == 403


def test_form_submit_without_cookie(client, page_token):
    token = page_token(client.get("/form").text)
    client.cookies.clear()
    r = client.post("/form", data={"message": "x", settings.CSRF_FORM_FIELD: token})
    assert r.status_code == 403


def test_rejection_is_logged_without_token(client, page_token, caplog):
    token = page_token(client.get("/form").text)
    client.cookies.clear()
    with caplog.at_level(logging.WARNING, logger="csrf_guard.security.transport"):
        client.post("/form", data={"message": "x", settings.CSRF_FORM_FIELD: token})
    messages = [rec.getMessage() for rec in caplog.records if rec.name == "csrf_guard.security.transport"]
    assert messages == ["csrf rejected method=POST path=/form"]
    assert token not in caplog.text


def test_enforcement_can_be_disabled(client, monkeypatch):
    monkeypatch.setattr(settings, "CSRF_ENFORCE", False)
    r = client.post("/form", data={"message": "unchecked"})
    assert r.status_code == 200


def test_form_content_type_is_case_insensitive(client, page_token):
    token = page_token(client.get("/form").text)
    r = client.post(
        "/form",
        content=f"message=hi&{settings.CSRF_FORM_FIELD}={token}",
        headers={"Content-Type": "Application/X-WWW-Form-Urlencoded"},
    )
    assert r.status_code == 200
    assert "Submitted: hi" in r.text


def test_uvicorn_access_log_is_muted(client):
    # the app's own access line replaces uvicorn's
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
    assert logging.getLogger("csrf_guard").level == logging.getLevelName(settings.LOG_LEVEL.upper())
