from __future__ import annotations

from flask import Flask, Response, redirect, render_template, request, url_for

from ..common.datetime_utils import now_local
from ..common.web import current_user, login_required
from ..container import Container
from ..core.constants import MONTH_NAMES
from ..users import access


def register(app: Flask, container: Container) -> None:
    year = container.report_year

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        user = current_user()
        stats = container.dashboard_service.stats(user, today=now_local().date())
        return render_template("dashboard.html", stats=stats, active_page="dashboard")

    @app.route("/reports", endpoint="reports")
    @login_required
    def reports():
        user = current_user()
        # Unit users fall back to their restricted dashboard.
        if not access.can_view_reports(user):
            return redirect(url_for("dashboard"))

        months = container.report_service.month_overview(user, year)
        return render_template("reports/months.html", months=months, year=year, active_page="reports")

    @app.route("/reports/<int:month_index>", endpoint="report_detail")
    @login_required
    def report_detail(month_index: int):
        user = current_user()
        if not access.can_view_reports(user):
            return redirect(url_for("dashboard"))
        if not 0 <= month_index < len(MONTH_NAMES):
            return redirect(url_for("reports"))

        data = container.report_service.build(user, year=year, month_index=month_index)
        return render_template("reports/detail.html", data=data, active_page="reports")

    @app.route("/reports/export.csv", endpoint="report_csv")
    @login_required
    def report_csv():
        user = current_user()
        if not access.can_view_reports(user):
            return redirect(url_for("dashboard"))

        month_index = request.args.get("month", type=int)
        if month_index is not None and not 0 <= month_index < len(MONTH_NAMES):
            return redirect(url_for("reports"))

        data = container.report_service.build(user, year=year, month_index=month_index)
        return Response(
            data.to_csv().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={data.filename}"},
        )
