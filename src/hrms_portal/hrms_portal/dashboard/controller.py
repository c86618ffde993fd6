from __future__ import annotations

from flask import Flask

from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard_service

    @app.route("/dashboard/admin", methods=["GET"], endpoint="admin_dashboard")
    def admin_dashboard():
        return ok(dashboard.admin())
