from __future__ import annotations

import io
import logging

from flask import Flask, request, send_file

from ..auth.guard import jwt_required
from ..common.datetime_utils import now_utc
from ..container import Container
from .excel_renderer import render_excel
from .pdf_renderer import render_pdf
from .service import ReportFilter

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ReportRenderError(RuntimeError):
    pass


def _filename(extension: str) -> str:
    return f"attendance-report-{int(now_utc().timestamp() * 1000)}.{extension}"


def register(app: Flask, container: Container) -> None:
    @app.route("/reports/attendance/pdf", methods=["GET"], endpoint="reports_pdf")
    @jwt_required
    def reports_pdf():
        report = container.report_service.build(ReportFilter.from_args(request.args))
        try:
            content = render_pdf(report)
        except Exception as e:
            logger.exception("PDF report rendering failed")
            raise ReportRenderError("Failed to generate PDF report") from e
        return send_file(
            io.BytesIO(content),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=_filename("pdf"),
        )

    @app.route("/reports/attendance/excel", methods=["GET"], endpoint="reports_excel")
    @jwt_required
    def reports_excel():
        report = container.report_service.build(ReportFilter.from_args(request.args))
        try:
            content = render_excel(report)
        except Exception as e:
            logger.exception("Excel report rendering failed")
            raise ReportRenderError("Failed to generate Excel report") from e
        return send_file(
            io.BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=_filename("xlsx"),
        )
