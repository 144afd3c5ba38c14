from __future__ import annotations

from flask import Flask, Response, flash, redirect, render_template, request, url_for

from ..common.web import current_user, login_required
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/participants", endpoint="participants")
    @login_required
    def participants():
        user = current_user()
        search = request.args.get("q", "")
        unit_filter = request.args.get("unit") or None
        page_no = request.args.get("page", 1, type=int)

        items = container.participant_service.list_visible(user, search=search, unit_filter=unit_filter)
        page = container.participant_service.paginate(items, page_no)
        return render_template(
            "participants/list.html",
            page=page,
            search=search,
            unit_filter=unit_filter or "",
            units=container.participant_service.unit_options(user),
            active_page="participants",
        )

    @app.route("/participants/add", methods=["POST"], endpoint="add_participant")
    @login_required
    def add_participant():
        try:
            p = container.participant_service.add(
                current_user(),
                name=request.form.get("name", ""),
                unit=request.form.get("unit", ""),
            )
            flash(f"{p.name} berhasil ditambahkan.", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            app.logger.exception("Failed to add participant")
            flash("Terjadi kesalahan sistem saat menambah peserta", "danger")
        return redirect(url_for("participants"))

    @app.route("/participants/<participant_id>/delete", methods=["POST"], endpoint="delete_participant")
    @login_required
    def delete_participant(participant_id: str):
        try:
            if container.participant_service.delete(current_user(), participant_id):
                flash("Peserta dihapus.", "success")
        except AuthorizationError as e:
            flash(str(e), "danger")
        except Exception:
            app.logger.exception("Failed to delete participant %s", participant_id)
            flash("Terjadi kesalahan sistem saat menghapus peserta", "danger")
        return redirect(url_for("participants"))

    @app.route("/participants/import", methods=["POST"], endpoint="import_participants")
    @login_required
    def import_participants():
        user = current_user()
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            flash("Pilih file CSV terlebih dahulu.", "warning")
            return redirect(url_for("participants"))

        try:
            text = upload.read().decode("utf-8-sig", errors="replace")
            result = container.participant_service.import_csv(user, text)
            target = f" ke {user.unit}" if user.unit else ""
            flash(f"Berhasil mengimpor {len(result.added)} data peserta{target}.", "success")
            if result.skipped:
                flash(f"{result.skipped} nama sudah terdaftar dan dilewati.", "info")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            app.logger.exception("Participant import failed")
            flash("Terjadi kesalahan sistem saat impor", "danger")
        return redirect(url_for("participants"))

    @app.route("/participants/template.csv", endpoint="participants_template")
    @login_required
    def participants_template():
        body = container.participant_service.template_csv(current_user())
        return Response(
            body.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=template_peserta_pdm.csv"},
        )

    @app.route("/participants/<participant_id>/qr.png", endpoint="participant_qr")
    @login_required
    def participant_qr(participant_id: str):
        try:
            p = container.participant_service.get(current_user(), participant_id)
        except ValidationError as e:
            return {"success": False, "message": str(e)}, 404
        return Response(container.participant_service.make_qr_png(p), mimetype="image/png")
