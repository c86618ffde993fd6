from __future__ import annotations

from flask import Flask, request

from ..common.http import current_employee_id, json_body, message, ok, optional_employee_id, query_int, query_limit
from ..container import Container


def register(app: Flask, container: Container) -> None:
    expenses = container.expense_service

    @app.route("/expenses", methods=["POST"], endpoint="create_expense")
    def create_expense():
        return ok(expenses.create(current_employee_id(), json_body()), 201)

    @app.route("/expenses/me", methods=["GET"], endpoint="my_expenses")
    def my_expenses():
        return ok(expenses.my_expenses(current_employee_id()))

    @app.route("/expenses/all", methods=["GET"], endpoint="all_expenses")
    def all_expenses():
        return ok(expenses.all_expenses(status=request.args.get("status"), limit=query_limit()))

    @app.route("/expenses/manager", methods=["GET"], endpoint="manager_expenses")
    def manager_expenses():
        return ok(
            expenses.manager_expenses(
                department_id=query_int("departmentId"),
                manager_id=optional_employee_id(),
                limit=query_limit(),
            )
        )

    @app.route("/expenses/totals", methods=["GET"], endpoint="expense_totals")
    def expense_totals():
        return ok(expenses.totals(employee_id=query_int("employeeId")))

    @app.route("/expenses/<int:expense_id>", methods=["PUT"], endpoint="update_expense")
    def update_expense(expense_id: int):
        return ok(expenses.update(current_employee_id(), expense_id, json_body()))

    @app.route("/expenses/<int:expense_id>", methods=["DELETE"], endpoint="delete_expense")
    def delete_expense(expense_id: int):
        expenses.delete(current_employee_id(), expense_id)
        return message("Expense deleted")

    @app.route("/expenses/<int:expense_id>/status", methods=["PUT"], endpoint="update_expense_status")
    def update_expense_status(expense_id: int):
        return ok(expenses.update_status(expense_id, json_body(), decided_by=optional_employee_id()))
