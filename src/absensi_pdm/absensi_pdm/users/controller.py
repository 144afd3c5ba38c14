from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import admin_required, current_user
from ..core.exceptions import AuthenticationError
from ..database.bootstrap import clear_all
from ..container import Container
from .service import SessionStore


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if current_user() is not None:
            return redirect(url_for("dashboard"))

        error = None
        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")

            try:
                user = container.auth_service.authenticate(username, password)
                SessionStore(session).save(user)
                app.logger.info("User %s logged in", user.username)
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                error = str(e)
            except Exception:
                app.logger.exception("Unexpected error during login")
                error = "Terjadi kesalahan sistem saat login"

        accounts = container.accounts_repo.list_all()
        return render_template("login.html", error=error, accounts=accounts)

    @app.route("/logout", endpoint="logout")
    def logout():
        SessionStore(session).clear()
        session.clear()
        flash("Anda telah keluar.", "info")
        return redirect(url_for("login"))

    @app.route("/admin/reset", methods=["POST"], endpoint="reset_data")
    @admin_required
    def reset_data():
        clear_all(container.store)
        flash("Semua data peserta, absensi dan periode telah dihapus.", "warning")
        return redirect(url_for("dashboard"))
