from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.guards import admin_required, login_required, viewer_from_session


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/classes", methods=["GET"], endpoint="admin_classes")
    @admin_required
    def admin_classes():
        search = request.args.get("q", "")
        return render_template(
            "admin/classes.html",
            classes=container.class_service.list_classes(search),
            school_years=container.class_service.list_school_years(search),
            search=search,
            active_page="admin_classes",
        )

    @app.route("/admin/classes/add", methods=["POST"], endpoint="add_class")
    @admin_required
    def add_class():
        try:
            container.class_service.add_class(
                current_user_type=viewer_from_session().user_type,
                grade=request.form.get("grade", ""),
                section=request.form.get("section", ""),
            )
            flash("Class added.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            app.logger.exception("Failed to add class")
            flash("Failed to add grade and section", "danger")
        return redirect(url_for("admin_classes"))

    @app.route("/admin/school-years/add", methods=["POST"], endpoint="add_school_year")
    @admin_required
    def add_school_year():
        try:
            container.class_service.add_school_year(
                current_user_type=viewer_from_session().user_type,
                school_year=request.form.get("school_year", ""),
            )
            flash("School year added.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            app.logger.exception("Failed to add school year")
            flash("Failed to add school year", "danger")
        return redirect(url_for("admin_classes"))

    @app.route("/api/classes", methods=["GET"], endpoint="api_classes")
    @login_required
    def api_classes():
        classes = container.class_service.list_classes(request.args.get("q", ""))
        return jsonify(
            [{"class_id": c.class_id, "grade": c.grade, "section": c.section} for c in classes]
        )

    @app.route("/api/school-years", methods=["GET"], endpoint="api_school_years")
    @login_required
    def api_school_years():
        years = container.class_service.list_school_years(request.args.get("q", ""))
        return jsonify([{"school_year_id": y.school_year_id, "school_year": y.school_year} for y in years])

    @app.route("/api/classes/sections/<grade>", methods=["GET"], endpoint="api_sections_for_grade")
    @login_required
    def api_sections_for_grade(grade: str):
        return jsonify(list(container.class_service.sections_for_grade(grade)))
