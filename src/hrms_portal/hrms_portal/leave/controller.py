from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import current_employee_id, json_body, message, ok, optional_employee_id, query_int, query_limit
from ..container import Container


def register(app: Flask, container: Container) -> None:
    leaves = container.leave_service

    @app.route("/leave-types", methods=["GET"], endpoint="list_leave_types")
    def list_leave_types():
        return ok(leaves.list_types())

    @app.route("/leave-types", methods=["POST"], endpoint="create_leave_type")
    def create_leave_type():
        return ok(leaves.create_type(json_body()), 201)

    @app.route("/leave-types/<int:leave_type_id>", methods=["PUT"], endpoint="update_leave_type")
    def update_leave_type(leave_type_id: int):
        return ok(leaves.update_type(leave_type_id, json_body()))

    @app.route("/leave-types/<int:leave_type_id>", methods=["DELETE"], endpoint="delete_leave_type")
    def delete_leave_type(leave_type_id: int):
        leaves.delete_type(leave_type_id)
        return message("Leave type deleted")

    @app.route("/employee/leaves", methods=["GET"], endpoint="my_leaves")
    def my_leaves():
        return ok(leaves.my_requests(current_employee_id()))

    @app.route("/employee/leaves", methods=["POST"], endpoint="apply_leave")
    def apply_leave():
        return ok(leaves.apply(current_employee_id(), json_body()), 201)

    @app.route("/employee/leaves/<int:request_id>", methods=["PUT"], endpoint="edit_leave")
    def edit_leave(request_id: int):
        return ok(leaves.edit(current_employee_id(), request_id, json_body()))

    @app.route("/employee/leaves/<int:request_id>", methods=["DELETE"], endpoint="delete_leave")
    def delete_leave(request_id: int):
        leaves.delete(current_employee_id(), request_id)
        return message("Leave request deleted")

    @app.route("/employee/leaves/all", methods=["GET"], endpoint="all_leaves")
    def all_leaves():
        return ok(leaves.all_requests(status=request.args.get("status"), limit=query_limit()))

    @app.route("/employee/leaves/<int:request_id>/status", methods=["PATCH"], endpoint="decide_leave")
    def decide_leave(request_id: int):
        return ok(leaves.decide(request_id, json_body(), decided_by=optional_employee_id()))

    @app.route("/employee/leaves/balance", methods=["GET"], endpoint="leave_balance")
    def leave_balance():
        return ok(leaves.balance(current_employee_id(), year=query_int("year")))

    @app.route("/leaves/manager/today", methods=["GET"], endpoint="leaves_today")
    def leaves_today():
        return ok(leaves.on_leave(parse_optional_date(request.args.get("date"))))
