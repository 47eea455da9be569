from datetime import datetime, timezone
from io import BytesIO

import jobboard.routers.company as company_mod
from jobboard.core.errors import ForbiddenError, InvalidTransitionError, InvalidStatusError, UploadFailedError

NOW = datetime(2026, 1, 5, tzinfo=timezone.utc)
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class _Company:
    def __init__(self, company_id="c1", email="hr@acme.example.com", password_hash="hashed"):
        self.id = company_id
        self.name = "Acme"
        self.email = email
        self.logo_url = "https://cdn.test/logo.png"
        self.password_hash = password_hash


class _Job:
    def __init__(self, job_id="j1", visible=True):
        self.id = job_id
        self.title = "Backend Engineer"
        self.description_html = "<p>APIs</p>"
        self.location = "Bangalore"
        self.category = "Programming"
        self.level = "Senior level"
        self.salary = 100
        self.visible = visible
        self.posted_at = NOW
        self.applicant_count = 2
        self.company = None


class _User:
    name = "Jane"
    email = "jane@example.com"
    resume_url = "https://cdn.test/cv.pdf"


class _Application:
    def __init__(self, status="Pending"):
        self.id = "a1"
        self.job_id = "j1"
        self.user_id = "u1"
        self.status = status
        self.applied_at = NOW
        self.updated_at = NOW
        self.job = _Job()
        self.user = _User()


JOB_BODY = {
    "title": "Backend Engineer",
    "description": "<p>APIs</p>",
    "location": "Bangalore",
    "category": "Programming",
    "level": "Senior level",
    "salary": 100,
}


def _register(client, **overrides):
    form = {"name": "Acme", "email": "hr@acme.example.com", "password": "password123"}
    form.update(overrides)
    return client.post(
        "/company/register",
        data=form,
        files={"image": ("logo.png", BytesIO(PNG), "image/png")},
    )


def test_register_success(monkeypatch, anon_client):
    monkeypatch.setattr(company_mod, "get_by_email", lambda db, email: None)
    monkeypatch.setattr(company_mod, "upload_logo", lambda ctype, content: "https://cdn.test/new.png")
    created = {}

    def _create(db, name, email, password, logo_url):
        created.update(name=name, email=email, logo_url=logo_url)
        return _Company(email=email)

    monkeypatch.setattr(company_mod, "create_company", _create)
    monkeypatch.setattr(company_mod, "create_access_token", lambda cid: "company-token")

    resp = _register(anon_client)

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["token"] == "company-token"
    assert created["logo_url"] == "https://cdn.test/new.png"


def test_register_rejects_existing_email(monkeypatch, anon_client):
    monkeypatch.setattr(company_mod, "get_by_email", lambda db, email: _Company())
    resp = _register(anon_client)
    assert resp.status_code == 409
    assert resp.json() == {"success": False, "message": "Company already registered", "code": "AlreadyRegistered"}


def test_register_validates_fields(anon_client):
    resp = _register(anon_client, password="short")
    assert resp.status_code == 422
    assert resp.json()["code"] == "ValidationError"

    resp = anon_client.post("/company/register", data={"name": "Acme", "email": "hr@acme.example.com", "password": "password123"})
    assert resp.status_code == 422
    assert "logo" in resp.json()["message"].lower()


def test_register_upload_failure(monkeypatch, anon_client):
    monkeypatch.setattr(company_mod, "get_by_email", lambda db, email: None)

    def _fail(ctype, content):
        raise UploadFailedError()

    monkeypatch.setattr(company_mod, "upload_logo", _fail)
    resp = _register(anon_client)
    assert resp.status_code == 502
    assert resp.json()["code"] == "UploadFailed"


def test_login_invalid_credentials(monkeypatch, anon_client):
    monkeypatch.setattr(company_mod, "get_by_email", lambda db, email: None)
    resp = anon_client.post("/company/login", json={"email": "x@acme.example.com", "password": "bad"})
    assert resp.status_code == 401
    assert resp.json()["code"] == "Unauthenticated"


def test_login_wrong_password(monkeypatch, anon_client):
    monkeypatch.setattr(company_mod, "get_by_email", lambda db, email: _Company())
    monkeypatch.setattr(company_mod, "verify_password", lambda plain, hashed: False)
    resp = anon_client.post("/company/login", json={"email": "hr@acme.example.com", "password": "bad"})
    assert resp.status_code == 401


def test_login_success(monkeypatch, anon_client):
    monkeypatch.setattr(company_mod, "get_by_email", lambda db, email: _Company())
    monkeypatch.setattr(company_mod, "verify_password", lambda plain, hashed: hashed == "hashed")
    monkeypatch.setattr(company_mod, "create_access_token", lambda cid: "tok-1")
    resp = anon_client.post("/company/login", json={"email": "hr@acme.example.com", "password": "good"})
    assert resp.status_code == 200
    assert resp.json()["data"]["token"] == "tok-1"
    assert resp.json()["data"]["company"]["name"] == "Acme"


def test_company_routes_require_token(anon_client):
    resp = anon_client.get("/company/list-jobs")
    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_get_company(client, stub_company):
    resp = client.get("/company/company")
    assert resp.status_code == 200
    assert resp.json()["data"]["email"] == stub_company.email


def test_update_profile(monkeypatch, client):
    seen = {}
    monkeypatch.setattr(company_mod, "upload_logo", lambda ctype, content: "https://cdn.test/v2.png")

    def _update(db, cid, name=None, logo_url=None):
        seen.update(name=name, logo_url=logo_url)
        company = _Company(company_id=cid)
        company.name = name
        company.logo_url = logo_url
        return company

    monkeypatch.setattr(company_mod, "update_company_profile", _update)
    resp = client.post(
        "/company/update-profile",
        data={"name": " Acme Labs "},
        files={"image": ("logo.png", BytesIO(PNG), "image/png")},
    )
    assert resp.status_code == 200
    assert seen == {"name": "Acme Labs", "logo_url": "https://cdn.test/v2.png"}


def test_post_job_success(monkeypatch, client, stub_company):
    seen = {}

    def _post(db, company_id, data):
        seen.update(company_id=company_id, title=data.title)
        return _Job()

    monkeypatch.setattr(company_mod, "post_job", _post)
    resp = client.post("/company/post-job", json=JOB_BODY)
    assert resp.status_code == 200
    assert resp.json()["data"]["visible"] is True
    assert seen == {"company_id": stub_company.id, "title": "Backend Engineer"}


def test_post_job_rejects_bad_fields(client):
    for patch in ({"salary": -1}, {"category": "Cooking"}, {"title": "   "}, {"location": "Atlantis"}, {"extra": 1}):
        resp = client.post("/company/post-job", json={**JOB_BODY, **patch})
        assert resp.status_code == 422, patch
        assert resp.json()["code"] == "ValidationError"
    body = dict(JOB_BODY)
    body.pop("level")
    assert client.post("/company/post-job", json=body).status_code == 422


def test_list_jobs(monkeypatch, client):
    monkeypatch.setattr(company_mod, "list_company_jobs", lambda db, cid: [_Job("j1"), _Job("j2", visible=False)])
    resp = client.get("/company/list-jobs")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [j["id"] for j in data] == ["j1", "j2"]
    assert data[0]["applicant_count"] == 2


def test_change_visibility_both_spellings(monkeypatch, client):
    monkeypatch.setattr(company_mod, "toggle_job_visibility", lambda db, jid, cid: _Job(jid, visible=False))
    for path in ("/company/change-visiblity", "/company/change-visibility"):
        resp = client.post(path, json={"id": "j1"})
        assert resp.status_code == 200
        assert resp.json()["data"]["visible"] is False


def test_change_visibility_forbidden(monkeypatch, client):
    def _deny(db, jid, cid):
        raise ForbiddenError("You can only change your own jobs")

    monkeypatch.setattr(company_mod, "toggle_job_visibility", _deny)
    resp = client.post("/company/change-visiblity", json={"id": "j1"})
    assert resp.status_code == 403
    assert resp.json()["code"] == "Forbidden"


def test_applicants(monkeypatch, client):
    seen = {}

    def _list(db, cid, job_id=None):
        seen["job_id"] = job_id
        return [_Application()]

    monkeypatch.setattr(company_mod, "list_company_applicants", _list)
    resp = client.get("/company/applicants", params={"job_id": "j1"})
    assert resp.status_code == 200
    row = resp.json()["data"][0]
    assert row["user_name"] == "Jane"
    assert row["resume_url"] == "https://cdn.test/cv.pdf"
    assert row["job_title"] == "Backend Engineer"
    assert seen["job_id"] == "j1"


def test_change_status_success(monkeypatch, client):
    monkeypatch.setattr(company_mod, "change_application_status", lambda db, cid, aid, st: _Application(status=st))
    resp = client.post("/company/change-status", json={"id": "a1", "status": "Accepted"})
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "Accepted"


def test_change_status_errors(monkeypatch, client):
    def _transition(db, cid, aid, st):
        raise InvalidTransitionError("Application is already Accepted")

    monkeypatch.setattr(company_mod, "change_application_status", _transition)
    resp = client.post("/company/change-status", json={"id": "a1", "status": "Rejected"})
    assert resp.status_code == 409
    assert resp.json()["code"] == "InvalidTransition"

    def _status(db, cid, aid, st):
        raise InvalidStatusError()

    monkeypatch.setattr(company_mod, "change_application_status", _status)
    resp = client.post("/company/change-status", json={"id": "a1", "status": "Hired"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "InvalidStatus"
