from __future__ import annotations

from flask import Flask, request

from ..common.http import current_employee_id, json_body, message, ok, query_int, query_limit
from ..container import Container


def register(app: Flask, container: Container) -> None:
    salaries = container.salary_service
    payroll = container.payroll_service
    payslips = container.payslip_service

    # -------- Salary structures --------
    @app.route("/salary-structures", methods=["GET"], endpoint="list_salary_structures")
    def list_salary_structures():
        return ok(salaries.list_structures())

    @app.route("/salary-structures", methods=["POST"], endpoint="create_salary_structure")
    def create_salary_structure():
        return ok(salaries.create_structure(json_body()), 201)

    @app.route("/salary-structures/<int:employee_id>", methods=["GET"], endpoint="employee_salary_structure")
    def employee_salary_structure(employee_id: int):
        return ok(salaries.get_for_employee(employee_id))

    @app.route("/salary-structures/<int:structure_id>", methods=["PUT"], endpoint="update_salary_structure")
    def update_salary_structure(structure_id: int):
        return ok(salaries.update_structure(structure_id, json_body()))

    @app.route("/salary-structures/<int:structure_id>", methods=["DELETE"], endpoint="delete_salary_structure")
    def delete_salary_structure(structure_id: int):
        salaries.delete_structure(structure_id)
        return message("Salary structure deleted")

    # -------- Payroll --------
    @app.route("/payroll", methods=["GET"], endpoint="list_payroll")
    def list_payroll():
        return ok(
            payroll.list_payroll(
                month=request.args.get("month"),
                employee_id=query_int("employeeId"),
                limit=query_limit(),
            )
        )

    @app.route("/payroll/generate", methods=["POST"], endpoint="generate_payroll")
    def generate_payroll():
        return ok(payroll.generate(json_body().get("month")), 201)

    @app.route("/payroll/run", methods=["POST"], endpoint="run_payroll")
    def run_payroll():
        return ok(payroll.run(json_body().get("month")))

    @app.route("/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    def payroll_summary():
        return ok(payroll.summary(request.args.get("month")))

    @app.route("/payroll/<int:payroll_id>", methods=["GET"], endpoint="get_payroll")
    def get_payroll(payroll_id: int):
        return ok(payroll.get(payroll_id))

    @app.route("/payroll/<int:payroll_id>/status", methods=["PATCH"], endpoint="update_payroll_status")
    def update_payroll_status(payroll_id: int):
        return ok(payroll.update_status(payroll_id, json_body()))

    # -------- Payslips --------
    @app.route("/payslips", methods=["GET"], endpoint="list_payslips")
    def list_payslips():
        return ok(
            payslips.list_payslips(
                month=request.args.get("month"),
                employee_id=query_int("employeeId"),
                limit=query_limit(),
            )
        )

    @app.route("/payslips/generate-from-payroll", methods=["POST"], endpoint="generate_payslips")
    def generate_payslips():
        return ok(payslips.generate_from_payroll(json_body().get("month")), 201)

    @app.route("/payslips/me/my-payslips", methods=["GET"], endpoint="my_payslips")
    def my_payslips():
        return ok(payslips.my_payslips(current_employee_id()))

    @app.route("/payslips/<int:payslip_id>", methods=["GET"], endpoint="get_payslip")
    def get_payslip(payslip_id: int):
        return ok(payslips.get_payslip(payslip_id))

    @app.route("/payslips/<int:payslip_id>/send", methods=["POST"], endpoint="send_payslip")
    def send_payslip(payslip_id: int):
        return ok(payslips.send(payslip_id))
