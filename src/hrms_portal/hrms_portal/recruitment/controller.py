from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, message, ok, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    recruitment = container.recruitment_service

    # -------- Job openings --------
    @app.route("/job-openings", methods=["GET"], endpoint="list_job_openings")
    def list_job_openings():
        return ok(recruitment.list_jobs(status=request.args.get("status"), department_id=query_int("departmentId")))

    @app.route("/job-openings", methods=["POST"], endpoint="create_job_opening")
    def create_job_opening():
        return ok(recruitment.create_job(json_body()), 201)

    @app.route("/job-openings/<int:job_id>", methods=["PUT"], endpoint="update_job_opening")
    def update_job_opening(job_id: int):
        return ok(recruitment.update_job(job_id, json_body()))

    @app.route("/job-openings/<int:job_id>", methods=["DELETE"], endpoint="delete_job_opening")
    def delete_job_opening(job_id: int):
        recruitment.delete_job(job_id)
        return message("Job opening deleted")

    # -------- Candidates --------
    @app.route("/candidates", methods=["GET"], endpoint="list_candidates")
    def list_candidates():
        return ok(recruitment.list_candidates(job_id=query_int("jobId"), status=request.args.get("status")))

    @app.route("/candidates", methods=["POST"], endpoint="add_candidate")
    def add_candidate():
        return ok(recruitment.add_candidate(json_body()), 201)

    @app.route("/candidates/<int:candidate_id>", methods=["DELETE"], endpoint="delete_candidate")
    def delete_candidate(candidate_id: int):
        recruitment.delete_candidate(candidate_id)
        return message("Candidate deleted")

    @app.route("/candidates/<int:candidate_id>/status", methods=["PATCH"], endpoint="update_candidate_status")
    def update_candidate_status(candidate_id: int):
        return ok(recruitment.update_candidate_status(candidate_id, json_body()))

    @app.route("/recruitment/pipeline", methods=["GET"], endpoint="recruitment_pipeline")
    def recruitment_pipeline():
        return ok(recruitment.pipeline())
