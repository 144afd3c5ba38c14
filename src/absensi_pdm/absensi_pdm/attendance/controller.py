from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import local_date_string, pinned_month_date
from ..common.web import admin_required, current_user, login_required
from ..core.constants import MONTH_NAMES
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from ..users import access


def register(app: Flask, container: Container) -> None:
    year = container.report_year

    def _valid_month(month_index: int) -> bool:
        return 0 <= month_index < len(MONTH_NAMES)

    @app.route("/attendance", endpoint="attendance_months")
    @login_required
    def attendance_months():
        user = current_user()
        counts = container.attendance_service.month_counts(user, year)
        months = container.period_service.months_for(user, year, counts)
        return render_template("attendance/months.html", months=months, year=year, active_page="attendance")

    @app.route("/attendance/<int:month_index>", endpoint="attendance_form")
    @login_required
    def attendance_form(month_index: int):
        user = current_user()
        if not _valid_month(month_index):
            return redirect(url_for("attendance_months"))

        is_open = container.period_service.is_open(year, month_index)
        if not access.can_access_period(user, is_open=is_open):
            flash("Periode absensi bulan ini ditutup.", "warning")
            return redirect(url_for("attendance_months"))

        search = request.args.get("q", "")
        date_string = local_date_string(pinned_month_date(year, month_index))
        rows = container.attendance_service.roster(user, date_string, search=search) if search else []
        return render_template(
            "attendance/form.html",
            year=year,
            month_index=month_index,
            month_name=MONTH_NAMES[month_index],
            is_open=is_open,
            search=search,
            rows=rows,
            statuses=list(AttendanceStatus),
            active_page="attendance",
        )

    @app.route("/attendance/<int:month_index>/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def attendance_checkin(month_index: int):
        user = current_user()
        search = request.form.get("q", "")
        try:
            record = container.attendance_service.check_in_for_month(
                user,
                request.form.get("participant_id", ""),
                request.form.get("status", ""),
                notes=request.form.get("notes"),
                year=year,
                month_index=month_index,
            )
            flash(f"{record.participant_name} dicatat sebagai {record.effective_status.label}!", "success")
            search = ""
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            app.logger.exception("Check-in failed")
            flash("Terjadi kesalahan sistem saat mencatat absensi", "danger")
        return redirect(url_for("attendance_form", month_index=month_index, q=search or None))

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="api_attendance_checkin")
    @login_required
    def api_attendance_checkin():
        """JSON check-in; ``month_index`` pins the date, otherwise the current time is used."""

        data = request.get_json(silent=True) or {}
        user = current_user()
        try:
            if data.get("month_index") is not None:
                record = container.attendance_service.check_in_for_month(
                    user,
                    str(data.get("participant_id", "")),
                    data.get("status"),
                    notes=data.get("notes"),
                    year=int(data.get("year") or year),
                    month_index=int(data["month_index"]),
                )
            else:
                record = container.attendance_service.check_in(
                    user,
                    str(data.get("participant_id", "")),
                    data.get("status"),
                    notes=data.get("notes"),
                )
            return jsonify({"success": True, "record": record.to_dict()}), 201
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except (TypeError, ValueError):
            return jsonify({"success": False, "message": "Data tidak valid"}), 400

    @app.route("/attendance/<int:month_index>/toggle", methods=["POST"], endpoint="toggle_period")
    @admin_required
    def toggle_period(month_index: int):
        try:
            is_open = container.period_service.toggle(current_user(), year, month_index)
            state = "dibuka" if is_open else "ditutup"
            flash(f"Absensi {MONTH_NAMES[month_index]} {year} {state}.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        return redirect(url_for("attendance_months"))
