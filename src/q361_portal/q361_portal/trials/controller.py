from __future__ import annotations

from flask import Flask, g, jsonify, render_template

from ..container import Container
from ..core.constants import TRIAL_REQUESTS_ROUTE
from ..core.enums import TrialRequestStatus
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/trial-requests/pending/count", endpoint="api_pending_trial_count")
    def api_pending_trial_count():
        try:
            count = container.trial_service.pending_count(g.get("principal"))
        except AuthorizationError as e:
            return jsonify({"message": str(e)}), 403
        return jsonify({"count": count})

    @app.route(TRIAL_REQUESTS_ROUTE, endpoint="trial_requests")
    def trial_requests():
        principal = g.get("principal")
        try:
            requests_ = container.trial_service.list_requests(principal, status=TrialRequestStatus.PENDING)
        except AuthorizationError:
            return render_template("403.html"), 403
        return render_template("trial_requests.html", trial_requests=requests_, active_page=TRIAL_REQUESTS_ROUTE)
