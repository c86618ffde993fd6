from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    shifts = container.shift_service

    @app.route("/shifts", methods=["GET"], endpoint="list_shifts")
    def list_shifts():
        return ok(shifts.list_shifts())

    @app.route("/shifts", methods=["POST"], endpoint="create_shift")
    def create_shift():
        return ok(shifts.create_shift(json_body()), 201)

    @app.route("/shifts/assign", methods=["POST"], endpoint="assign_shift")
    def assign_shift():
        schedule_id = shifts.assign(json_body())
        return ok({"message": "Shift assigned", "scheduleId": schedule_id}, 201)

    @app.route("/shifts/week", methods=["GET"], endpoint="weekly_roster")
    def weekly_roster():
        return ok(shifts.weekly_roster(parse_iso_date(request.args.get("start") or "")))
