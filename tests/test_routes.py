from src.q361_portal.q361_portal.core.enums import Role


def test_anonymous_home_is_public_landing(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Sign in" in resp.data
    assert b"nav-category" not in resp.data


def test_anonymous_protected_page_redirects_to_landing(client):
    resp = client.get("/employees")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/")


def test_anonymous_unknown_page_redirects_to_landing(client):
    resp = client.get("/does-not-exist")
    assert resp.status_code == 302


def test_public_routes_need_no_session(client):
    assert client.get("/subscription-plans").status_code == 200
    assert client.get("/psychometric-test").status_code == 200


def test_anonymous_api_is_unauthorized(client):
    assert client.get("/api/navigation").status_code == 401
    assert client.get("/api/user").status_code == 401
    assert client.get("/api/trial-requests/pending/count").status_code == 401


def test_employee_lands_on_personal_dashboard(login_as):
    client = login_as(3)
    resp = client.get("/")
    assert resp.status_code == 200
    assert b'data-landing="personal_dashboard"' in resp.data
    assert b"John Doe" in resp.data
    assert b"Employee" in resp.data


def test_logistics_lands_on_logistics_dashboard(login_as):
    resp = login_as(4).get("/")
    assert b'data-landing="logistics_dashboard"' in resp.data


def test_hr_lands_on_admin_dashboard_with_badge(login_as):
    resp = login_as(2).get("/")
    assert b'data-landing="admin_dashboard"' in resp.data
    assert b'<span class="badge">99+</span>' in resp.data
    assert b"HR Administrator" in resp.data


def test_employee_sees_no_trial_badge(login_as):
    resp = login_as(3).get("/")
    assert b'class="badge"' not in resp.data
    assert b"/admin/trial-requests" not in resp.data


def test_pending_count_is_hr_only(login_as):
    client = login_as(3)
    assert client.get("/api/trial-requests/pending/count").status_code == 403

    client = login_as(2)
    resp = client.get("/api/trial-requests/pending/count")
    assert resp.status_code == 200
    assert resp.get_json() == {"count": 150}


def test_navigation_api_for_crm_employee(login_as):
    resp = login_as(3).get("/api/navigation")
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["role"] == "employee"
    assert body["roleDisplayName"] == "Employee"
    routes = [e["route"] for c in body["categories"] for e in c["entries"]]
    assert "/crm-inquiries" in routes
    # employees get view on employee_management by default
    assert "/employees" in routes
    assert "/super-admin" not in routes
    assert "/crm-access-management" not in routes
    labels = {e["route"]: e["label"] for c in body["categories"] for e in c["entries"]}
    assert labels["/organization"] == "Responsibilities & Reporting"


def test_navigation_api_focus_refetches(login_as, container):
    client = login_as(2)
    client.get("/api/navigation")
    source = container.badge_registry._sources["trial-requests"]
    calls = source.calls

    body = client.get("/api/navigation?focus=1").get_json()
    assert source.calls == calls + 1
    badges = [e["badge"] for c in body["categories"] for e in c["entries"] if e["badge"]]
    assert badges == ["99+"]


def test_hidden_catalog_page_is_forbidden(login_as):
    client = login_as(3)
    assert client.get("/super-admin").status_code == 403
    assert client.get("/admin/trial-requests").status_code == 403
    assert client.get("/crm-daily-log").status_code == 200


def test_hr_can_open_trial_requests(login_as):
    assert login_as(2).get("/admin/trial-requests").status_code == 200


def test_admin_role_can_open_trial_requests_listed_in_sidebar(repos, make_user, login_as):
    users, _, _ = repos
    users.add(make_user(6, "sysop", Role.ADMIN))
    client = login_as(6)

    body = client.get("/api/navigation").get_json()
    routes = [e["route"] for c in body["categories"] for e in c["entries"]]
    assert "/admin/trial-requests" in routes
    assert client.get("/admin/trial-requests").status_code == 200
    # the pending counter stays HR-only
    assert client.get("/api/trial-requests/pending/count").status_code == 403


def test_stale_session_is_cleared(login_as):
    client = login_as(5)
    resp = client.get("/employees")
    assert resp.status_code == 302
    with client.session_transaction() as sess:
        assert "user_id" not in sess


def test_missing_user_session_is_cleared(login_as):
    client = login_as(99)
    assert client.get("/api/user").status_code == 401


def test_api_login_and_user(client):
    resp = client.post("/api/login", json={"username": "jdoe", "password": "secret"})
    assert resp.status_code == 200
    assert resp.get_json()["hasCrmAccess"] is True

    user = client.get("/api/user").get_json()
    assert user["username"] == "jdoe"
    assert user["role"] == "employee"
    assert user["permissions"]["announcements"] == "view"

    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/user").status_code == 401


def test_api_login_rejects_bad_password(client):
    resp = client.post("/api/login", json={"username": "jdoe", "password": "nope"})
    assert resp.status_code == 401


def test_form_login_redirects_home(client):
    resp = client.post("/auth", data={"username": "logistics", "password": "secret"})
    assert resp.status_code == 302
    assert b'data-landing="logistics_dashboard"' in client.get("/").data
