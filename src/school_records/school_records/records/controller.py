from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, render_template, request

from ..container import Container
from ..users.guards import login_required, viewer_from_session
from .filters import FilterSelector


def register(app: Flask, container: Container) -> None:
    def _selector() -> FilterSelector:
        return FilterSelector.from_args(request.args, viewer_from_session())

    @app.route("/report", methods=["GET"], endpoint="report")
    @login_required
    def report():
        viewer = viewer_from_session()
        selector = FilterSelector.from_args(request.args, viewer)
        selection = selector.selection

        view = container.record_service.build_overview(viewer, selection)
        reference = container.record_service.reference_lists()
        sections = container.class_service.sections_for_grade(selection.grade) if selection.grade is not None else []

        return render_template(
            "records/overview.html",
            view=view,
            filters=selector.options(school_years=reference.school_years, grades=reference.grades),
            sections=sections,
            active_page="report",
        )

    @app.route("/api/records/overview", methods=["GET"], endpoint="api_records_overview")
    @login_required
    def api_records_overview():
        try:
            view = container.record_service.build_overview(viewer_from_session(), _selector().selection)
        except Exception:
            app.logger.exception("Failed to build record overview")
            return jsonify({"success": False, "message": "Could not load records"}), 500
        return jsonify({"success": True, "data": view.to_dict()})

    @app.route("/report.csv", methods=["GET"], endpoint="report_csv")
    @login_required
    def report_csv():
        viewer = viewer_from_session()
        selection = _selector().selection
        rows = container.record_service.export_rows(viewer, selection)

        out = io.StringIO()
        fieldnames = list(rows[0].keys()) if rows else ["Grade"]
        writer = csv.DictWriter(out, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        parts = ["record_overview"]
        if selection.school_year:
            parts.append(selection.school_year)
        if selection.month:
            parts.append(f"m{selection.month:02d}")
        if selection.week:
            parts.append(f"w{selection.week}")
        filename = "_".join(parts) + ".csv"

        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
