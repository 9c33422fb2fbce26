from src.q361_portal.q361_portal.access.landing import anonymous_may_view, choose_landing_component, is_public_route
from src.q361_portal.q361_portal.core.enums import LandingComponent, Role


def test_landing_by_role(make_principal):
    assert choose_landing_component(make_principal(role=Role.LOGISTICS_MANAGER)) == LandingComponent.LOGISTICS_DASHBOARD
    assert choose_landing_component(make_principal(role=Role.EMPLOYEE)) == LandingComponent.PERSONAL_DASHBOARD
    for role in (Role.HR_ADMIN, Role.BRANCH_MANAGER, Role.CONTENT_CREATOR, Role.ADMIN):
        assert choose_landing_component(make_principal(role=role)) == LandingComponent.ADMIN_DASHBOARD


def test_unknown_role_gets_general_dashboard(make_principal):
    assert choose_landing_component(make_principal(role="nope")) == LandingComponent.ADMIN_DASHBOARD


def test_no_principal_gets_public_landing():
    assert choose_landing_component(None) == LandingComponent.LANDING


def test_public_routes():
    assert is_public_route("/psychometric-test")
    assert is_public_route("/subscription-plans/")
    assert is_public_route("/subscribe?plan=starter")
    assert not is_public_route("/employees")
    assert not is_public_route("/")


def test_anonymous_may_view_landing_and_login_only():
    assert anonymous_may_view("/")
    assert anonymous_may_view("/auth")
    assert anonymous_may_view("/api/user")
    assert not anonymous_may_view("/settings")
    assert not anonymous_may_view("/api/navigation")
