from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_date, format_month, now_local
from ..common.web import manager_required
from ..container import Container
from ..core.constants import ALL_EMPLOYEES
from ..core.exceptions import InvalidRange
from .service import CSV_HEADER, csv_rows


def register(app: Flask, container: Container) -> None:
    def _write_csv(*, records, filename: str):
        """Write joined attendance records to a CSV download."""

        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow(CSV_HEADER)
        writer.writerows(csv_rows(records))

        return app.response_class(
            out.getvalue().encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _range_args():
        start = request.args.get("startDate", "")
        end = request.args.get("endDate", "")
        if not start or not end:
            raise InvalidRange("Start date and end date are required")
        return start, end, request.args.get("employee") or ALL_EMPLOYEES

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    @manager_required
    def attendance_report():
        start, end, employee = _range_args()
        report = container.report_service.build_report(start=start, end=end, employee=employee)
        return jsonify(report.to_dict())

    @app.route("/api/attendance/export-report", methods=["GET"], endpoint="export_report")
    @manager_required
    def export_report():
        start, end, employee = _range_args()
        report = container.report_service.build_report(start=start, end=end, employee=employee)
        return _write_csv(records=report.records, filename=f"attendance-report-{start}-to-{end}.csv")

    @app.route("/api/attendance/export", methods=["GET"], endpoint="export_day")
    @manager_required
    def export_day():
        day = request.args.get("date") or format_date(now_local().date())
        records = container.attendance_service.for_date(day)
        return _write_csv(records=records, filename=f"attendance-{day}.csv")

    @app.route("/api/attendance/calendar", methods=["GET"], endpoint="attendance_calendar")
    @manager_required
    def attendance_calendar():
        month = request.args.get("month") or format_month(now_local().date())
        grid = container.analytics_service.calendar(month)
        return jsonify({"calendar": [d.to_dict() for d in grid]})

    @app.route("/api/dashboard/manager", methods=["GET"], endpoint="manager_dashboard")
    @manager_required
    def manager_dashboard():
        return jsonify(container.analytics_service.manager_dashboard().to_dict())
