from __future__ import annotations

from flask import Flask

from ..common.http import json_body, message, ok, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    holidays = container.holiday_service

    @app.route("/holidays", methods=["GET"], endpoint="list_holidays")
    def list_holidays():
        return ok(holidays.list_holidays(year=query_int("year")))

    @app.route("/holidays", methods=["POST"], endpoint="create_holiday")
    def create_holiday():
        return ok(holidays.create_holiday(json_body()), 201)

    @app.route("/holidays/<int:holiday_id>", methods=["PUT"], endpoint="update_holiday")
    def update_holiday(holiday_id: int):
        return ok(holidays.update_holiday(holiday_id, json_body()))

    @app.route("/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="delete_holiday")
    def delete_holiday(holiday_id: int):
        holidays.delete_holiday(holiday_id)
        return message("Holiday deleted")
