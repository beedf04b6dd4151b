from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_date, format_month, now_local
from ..common.web import current_user_id, login_required, manager_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _month_arg() -> str:
        return request.args.get("month") or format_month(now_local().date())

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        user_id = current_user_id()
        today = format_date(now_local().date())
        placeholder = container.attendance_service.find_by_user_and_date(user_id, today)
        record = container.attendance_service.check_in(user_id)
        # Filling an existing absent row is an update, not a creation.
        return jsonify(record.to_dict()), 200 if placeholder else 201

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        record = container.attendance_service.check_out(current_user_id())
        return jsonify(record.to_dict())

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        today = format_date(now_local().date())
        record = container.attendance_service.find_by_user_and_date(current_user_id(), today)
        return jsonify(record.to_dict() if record else None)

    @app.route("/api/attendance/my-history", methods=["GET"], endpoint="my_history")
    @login_required
    def my_history():
        history, summary = container.analytics_service.month_history(current_user_id(), _month_arg())
        return jsonify({"history": [r.to_dict() for r in history], "summary": summary.to_dict()})

    @app.route("/api/attendance/my-summary", methods=["GET"], endpoint="my_summary")
    @login_required
    def my_summary():
        summary = container.analytics_service.monthly_summary(current_user_id(), _month_arg())
        return jsonify(summary.to_dict())

    @app.route("/api/dashboard/employee", methods=["GET"], endpoint="employee_dashboard")
    @login_required
    def employee_dashboard():
        return jsonify(container.analytics_service.employee_dashboard(current_user_id()).to_dict())

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_all")
    @manager_required
    def attendance_all():
        day = request.args.get("date") or format_date(now_local().date())
        records = container.attendance_service.for_date(day)
        return jsonify({"attendance": [r.to_dict() for r in records]})
