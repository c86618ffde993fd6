from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import current_month
from ..common.http import current_employee_id, json_body, ok, optional_employee_id, query_int, query_limit
from ..container import Container


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    def _month() -> str:
        return (request.args.get("month") or "").strip() or current_month()

    @app.route("/attendance/punch-in", methods=["POST"], endpoint="punch_in")
    def punch_in():
        return ok(attendance.punch_in(current_employee_id()), 201)

    @app.route("/attendance/punch-out", methods=["POST"], endpoint="punch_out")
    def punch_out():
        return ok(attendance.punch_out(current_employee_id()))

    @app.route("/attendance/me", methods=["GET"], endpoint="my_attendance")
    def my_attendance():
        return ok(attendance.my_records(current_employee_id(), month=_month()))

    @app.route("/attendance/all", methods=["GET"], endpoint="all_attendance")
    def all_attendance():
        return ok(
            attendance.all_records(
                month=_month(),
                department_id=query_int("departmentId"),
                limit=query_limit(),
            )
        )

    @app.route("/attendance/team", methods=["GET"], endpoint="team_attendance")
    def team_attendance():
        return ok(
            attendance.team_records(
                month=_month(),
                department_id=query_int("departmentId"),
                manager_id=optional_employee_id(),
                limit=query_limit(),
            )
        )

    @app.route("/attendance/calendar", methods=["GET"], endpoint="attendance_calendar")
    def attendance_calendar():
        return ok(attendance.calendar(current_employee_id(), month=_month()))

    @app.route("/attendance-request", methods=["POST"], endpoint="create_attendance_request")
    def create_attendance_request():
        return ok(attendance.create_request(current_employee_id(), json_body()), 201)

    @app.route("/attendance-request/me", methods=["GET"], endpoint="my_attendance_requests")
    def my_attendance_requests():
        return ok(attendance.my_requests(current_employee_id()))

    @app.route("/attendance-request/manager", methods=["GET"], endpoint="manager_attendance_requests")
    def manager_attendance_requests():
        return ok(
            attendance.manager_requests(
                status=request.args.get("status"),
                department_id=query_int("departmentId"),
                limit=query_limit(),
            )
        )

    @app.route("/attendance-request/<int:request_id>/status", methods=["PATCH"], endpoint="decide_attendance_request")
    def decide_attendance_request(request_id: int):
        return ok(attendance.decide_request(request_id, json_body(), decided_by=optional_employee_id()))
