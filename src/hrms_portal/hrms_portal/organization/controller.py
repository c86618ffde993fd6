from __future__ import annotations

from flask import Flask

from ..common.http import json_body, message, ok, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    org = container.organization_service

    # -------- Companies --------
    @app.route("/companies", methods=["GET"], endpoint="list_companies")
    def list_companies():
        return ok(org.list_companies())

    @app.route("/companies", methods=["POST"], endpoint="create_company")
    def create_company():
        return ok(org.create_company(json_body()), 201)

    @app.route("/companies/<int:company_id>", methods=["PUT"], endpoint="update_company")
    def update_company(company_id: int):
        return ok(org.update_company(company_id, json_body()))

    @app.route("/companies/<int:company_id>", methods=["DELETE"], endpoint="delete_company")
    def delete_company(company_id: int):
        org.delete_company(company_id)
        return message("Company deleted")

    # -------- Branches --------
    @app.route("/branches", methods=["GET"], endpoint="list_branches")
    def list_branches():
        return ok(org.list_branches(company_id=query_int("companyId")))

    @app.route("/branches", methods=["POST"], endpoint="create_branch")
    def create_branch():
        return ok(org.create_branch(json_body()), 201)

    @app.route("/branches/<int:branch_id>", methods=["PUT"], endpoint="update_branch")
    def update_branch(branch_id: int):
        return ok(org.update_branch(branch_id, json_body()))

    @app.route("/branches/<int:branch_id>", methods=["DELETE"], endpoint="delete_branch")
    def delete_branch(branch_id: int):
        org.delete_branch(branch_id)
        return message("Branch deleted")

    # -------- Departments --------
    @app.route("/departments", methods=["GET"], endpoint="list_departments")
    def list_departments():
        return ok(org.list_departments(company_id=query_int("companyId"), branch_id=query_int("branchId")))

    @app.route("/departments", methods=["POST"], endpoint="create_department")
    def create_department():
        return ok(org.create_department(json_body()), 201)

    @app.route("/departments/<int:department_id>", methods=["PUT"], endpoint="update_department")
    def update_department(department_id: int):
        return ok(org.update_department(department_id, json_body()))

    @app.route("/departments/<int:department_id>", methods=["DELETE"], endpoint="delete_department")
    def delete_department(department_id: int):
        org.delete_department(department_id)
        return message("Department deleted")

    # -------- Designations --------
    @app.route("/designations", methods=["GET"], endpoint="list_designations")
    def list_designations():
        return ok(
            org.list_designations(
                company_id=query_int("companyId"),
                department_id=query_int("departmentId"),
            )
        )

    @app.route("/designations", methods=["POST"], endpoint="create_designation")
    def create_designation():
        return ok(org.create_designation(json_body()), 201)

    @app.route("/designations/<int:designation_id>", methods=["PUT"], endpoint="update_designation")
    def update_designation(designation_id: int):
        return ok(org.update_designation(designation_id, json_body()))

    @app.route("/designations/<int:designation_id>", methods=["DELETE"], endpoint="delete_designation")
    def delete_designation(designation_id: int):
        org.delete_designation(designation_id)
        return message("Designation deleted")
