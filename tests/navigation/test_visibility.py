from __future__ import annotations

from src.q361_portal.q361_portal.core.enums import PermissionModule, Role
from src.q361_portal.q361_portal.navigation.catalog import NAVIGATION_MODEL, all_routes
from src.q361_portal.q361_portal.navigation.model import category, entry
from src.q361_portal.q361_portal.navigation.visibility import (
    resolve_label,
    role_display_name,
    visible_navigation,
)


def _titles(categories):
    return [c.title for c in categories]


def _routes(categories):
    return [e.route for c in categories for e in c.entries]


def _label(categories, route):
    for c in categories:
        for e in c.entries:
            if e.route == route:
                return e.label
    return None


def test_catalog_routes_are_unique():
    routes = all_routes()
    assert len(routes) == len(set(routes))


def test_catalog_roles_are_valid():
    for cat in NAVIGATION_MODEL:
        for item in cat.entries:
            assert item.allowed_roles
            assert all(isinstance(r, Role) for r in item.allowed_roles)


def test_no_principal_sees_nothing():
    assert visible_navigation(None) == ()


def test_admin_sees_whole_catalog(make_principal):
    nav = visible_navigation(make_principal("admin", role=Role.HR_ADMIN))
    assert _routes(nav) == list(all_routes())
    assert _titles(nav) == [c.title for c in NAVIGATION_MODEL]


def test_same_inputs_same_output(make_principal):
    user = make_principal("lead", Role.TEAM_LEAD, permissions={"announcements": "view"})
    assert visible_navigation(user) == visible_navigation(user)


def test_empty_categories_are_omitted(make_principal):
    nav = visible_navigation(make_principal("lina", Role.LOGISTICS_MANAGER))
    titles = _titles(nav)
    assert "Assessment & Testing" not in titles
    assert "Q361 Studio" not in titles
    assert len(nav) < len(NAVIGATION_MODEL)
    assert all(c.entries for c in nav)


def test_order_follows_catalog(make_principal):
    nav = visible_navigation(make_principal("lead", Role.TEAM_LEAD))
    expected = [r for r in all_routes() if r in set(_routes(nav))]
    assert _routes(nav) == expected


def test_permission_override_reveals_entry(make_principal):
    model = (
        category(
            "People",
            entry("Employees", "/employees", "users", [Role.HR_ADMIN], permission=PermissionModule.EMPLOYEE_MANAGEMENT),
        ),
        category("Admin", entry("Super Admin", "/super-admin", "crown", [Role.HR_ADMIN])),
    )
    without = visible_navigation(make_principal("jdoe", Role.EMPLOYEE), model)
    with_view = visible_navigation(
        make_principal("jdoe", Role.EMPLOYEE, permissions={"employee_management": "view"}), model
    )
    assert without == ()
    assert _titles(with_view) == ["People"]


def test_crm_flag_shows_crm_entries_for_studio_role(make_principal):
    user = make_principal("sami", Role.CONTENT_CREATOR, has_crm_access=True)
    routes = _routes(visible_navigation(user))
    assert "/crm-inquiries" in routes
    assert "/crm-management-dashboard" in routes
    assert "/crm-access-management" not in routes


def test_organization_label_for_hr_and_admin(make_principal):
    for user in (make_principal("hr", Role.HR_ADMIN), make_principal("admin", Role.EMPLOYEE)):
        assert _label(visible_navigation(user), "/organization") == "Organization"


def test_organization_label_for_everyone_else(make_principal):
    for role in (Role.EMPLOYEE, Role.BRANCH_MANAGER, Role.PROJECT_MANAGER):
        nav = visible_navigation(make_principal("someone", role))
        assert _label(nav, "/organization") == "Responsibilities & Reporting"


def test_other_labels_are_static(make_principal):
    item = NAVIGATION_MODEL[0].entries[1]
    assert resolve_label(item, make_principal("admin", Role.HR_ADMIN)) == item.label
    assert resolve_label(item, None) == item.label


def test_badges_attached_only_to_notification_entries(make_principal):
    nav = visible_navigation(make_principal("admin", Role.HR_ADMIN), badges=lambda source: 150)
    badges = {e.route: e.badge for c in nav for e in c.entries if e.badge}
    assert badges == {"/admin/trial-requests": "99+"}


def test_failing_badge_lookup_hides_badge(make_principal):
    def boom(source):
        raise RuntimeError("down")

    nav = visible_navigation(make_principal("admin", Role.HR_ADMIN), badges=boom)
    assert all(e.badge is None for c in nav for e in c.entries)


def test_role_display_names():
    assert role_display_name(Role.HR_ADMIN) == "HR Administrator"
    assert role_display_name("admin") == "System Administrator"
    assert role_display_name(None) == "Employee"
    assert role_display_name("intern") == "intern"
