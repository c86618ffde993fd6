from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, message, ok, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    @app.route("/users", methods=["GET"], endpoint="list_users")
    def list_users():
        active = request.args.get("active")
        return ok(
            employees.list_employees(
                department_id=query_int("departmentId"),
                role=request.args.get("role") or None,
                is_active=None if active is None else active.lower() in {"1", "true", "yes"},
            )
        )

    @app.route("/users", methods=["POST"], endpoint="create_user")
    def create_user():
        return ok(employees.create_employee(json_body()), 201)

    @app.route("/users/<int:employee_id>", methods=["GET"], endpoint="get_user")
    def get_user(employee_id: int):
        return ok(employees.get_employee(employee_id))

    @app.route("/users/<int:employee_id>", methods=["PATCH"], endpoint="update_user")
    def update_user(employee_id: int):
        return ok(employees.update_employee(employee_id, json_body()))

    @app.route("/users/<int:employee_id>", methods=["DELETE"], endpoint="delete_user")
    def delete_user(employee_id: int):
        employees.delete_employee(employee_id)
        return message("Employee deleted")

    @app.route("/users/<int:employee_id>/deactivate", methods=["POST"], endpoint="deactivate_user")
    def deactivate_user(employee_id: int):
        return ok(employees.deactivate_employee(employee_id))
