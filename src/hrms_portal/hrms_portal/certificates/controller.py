from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok, query_int, query_limit
from ..common.validators import require_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    certificates = container.certificate_service

    # -------- Templates --------
    @app.route("/certificates/templates", methods=["GET"], endpoint="list_certificate_templates")
    def list_certificate_templates():
        return ok(certificates.list_templates())

    @app.route("/certificates/templates/<int:template_id>", methods=["GET"], endpoint="get_certificate_template")
    def get_certificate_template(template_id: int):
        return ok(certificates.get_template(template_id))

    @app.route("/certificates/templates/initialize", methods=["POST"], endpoint="initialize_certificate_templates")
    def initialize_certificate_templates():
        return ok(certificates.initialize_templates(), 201)

    # -------- Certificates --------
    @app.route("/certificates/students", methods=["GET"], endpoint="certificate_students")
    def certificate_students():
        return ok(certificates.list_students(school_id=query_int("schoolId"), grade=request.args.get("grade")))

    @app.route("/certificates/my-certificates", methods=["GET"], endpoint="my_certificates")
    def my_certificates():
        return ok(certificates.my_certificates(require_id(request.args.get("studentId"), "Student")))

    @app.route("/certificates", methods=["GET"], endpoint="list_certificates")
    def list_certificates():
        return ok(
            certificates.list_certificates(
                school_id=query_int("schoolId"),
                grade=request.args.get("grade"),
                limit=query_limit(),
            )
        )

    @app.route("/certificates", methods=["POST"], endpoint="create_certificate")
    def create_certificate():
        return ok(certificates.create_certificate(json_body()), 201)

    @app.route("/certificates/<int:certificate_id>", methods=["GET"], endpoint="get_certificate")
    def get_certificate(certificate_id: int):
        return ok(certificates.get_certificate(certificate_id))

    @app.route("/certificates/<int:certificate_id>/preview", methods=["POST"], endpoint="preview_certificate")
    def preview_certificate(certificate_id: int):
        return ok(certificates.preview(certificate_id, json_body()))

    @app.route("/certificates/<int:certificate_id>/generate", methods=["POST"], endpoint="generate_certificate")
    def generate_certificate(certificate_id: int):
        return ok(certificates.generate(certificate_id, json_body()))

    @app.route("/certificates/<int:certificate_id>/resend", methods=["POST"], endpoint="resend_certificate")
    def resend_certificate(certificate_id: int):
        return ok(certificates.resend(certificate_id, json_body()))
