from __future__ import annotations

from flask import Flask, g, render_template

from ..access.landing import PUBLIC_ROUTES, choose_landing_component
from ..container import Container
from ..core.constants import TRIAL_REQUESTS_ROUTE
from ..core.enums import LandingComponent
from ..navigation.catalog import NAVIGATION_MODEL
from ..navigation.visibility import entry_visible, resolve_label

LANDING_TEMPLATES = {
    LandingComponent.LANDING: "landing.html",
    LandingComponent.PERSONAL_DASHBOARD: "dashboards/employee.html",
    LandingComponent.LOGISTICS_DASHBOARD: "dashboards/logistics.html",
    LandingComponent.ADMIN_DASHBOARD: "dashboards/admin.html",
}

# Catalog routes served by their own feature controller.
_OWN_CONTROLLER = {"/", TRIAL_REQUESTS_ROUTE}


def _endpoint_for(route: str, prefix: str) -> str:
    return prefix + route.strip("/").replace("/", "_").replace("-", "_")


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="home")
    def home():
        component = choose_landing_component(g.get("principal"))
        return render_template(LANDING_TEMPLATES[component], landing=component.value, active_page="/")

    def make_public_view(route: str):
        def view():
            return render_template("public_page.html", route=route)

        return view

    for route in sorted(PUBLIC_ROUTES):
        app.add_url_rule(route, endpoint=_endpoint_for(route, "public_"), view_func=make_public_view(route))

    def make_module_view(item):
        def view():
            principal = g.get("principal")
            if not entry_visible(item, principal):
                return render_template("403.html"), 403
            return render_template(
                "page.html",
                title=resolve_label(item, principal),
                route=item.route,
                active_page=item.route,
            )

        return view

    for cat in NAVIGATION_MODEL:
        for item in cat.entries:
            if item.route in _OWN_CONTROLLER:
                continue
            app.add_url_rule(item.route, endpoint=_endpoint_for(item.route, "page_"), view_func=make_module_view(item))
