from __future__ import annotations

import io

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas

from ..common.datetime_utils import isoformat
from .columns import COLUMNS, row_values
from .service import ReportData

# Relative widths of COLUMNS; scaled to the usable page width.
_WEIGHTS = (1.1, 2.2, 1.1, 1.0, 1.0, 1.0, 1.1, 2.5)
_ROW_HEIGHT = 16
_MARGIN = 36


def _fit(c: canvas.Canvas, text: str, width: float, font: str, size: int) -> str:
    if c.stringWidth(text, font, size) <= width:
        return text
    while text and c.stringWidth(text + "...", font, size) > width:
        text = text[:-1]
    return text + "..."


def render_pdf(report: ReportData) -> bytes:
    buf = io.BytesIO()
    page_size = landscape(A4)
    c = canvas.Canvas(buf, pagesize=page_size)
    c.setTitle("Attendance Report")
    width, height = page_size

    usable = width - 2 * _MARGIN
    total_weight = sum(_WEIGHTS)
    col_widths = [usable * w / total_weight for w in _WEIGHTS]

    y = height - _MARGIN

    c.setFont("Helvetica-Bold", 16)
    c.drawString(_MARGIN, y, "Attendance Report")
    y -= 22

    c.setFont("Helvetica", 10)
    c.drawString(_MARGIN, y, f"Period: {report.period_label}")
    y -= 14
    if report.employee:
        c.drawString(_MARGIN, y, f"Employee: {report.employee.names} ({report.employee.employee_code})")
        y -= 14
    c.drawString(_MARGIN, y, f"Generated at: {isoformat(report.generated_at)}")
    y -= 14

    s = report.summary
    c.drawString(
        _MARGIN,
        y,
        f"Total records: {s.total_records}   Total hours: {s.total_hours:.2f}   Average hours: {s.average_hours:.2f}",
    )
    y -= 24

    def draw_header():
        nonlocal y
        c.setFillColor(colors.HexColor("#2F5597"))
        c.rect(_MARGIN, y - 4, usable, _ROW_HEIGHT, stroke=0, fill=1)
        c.setFillColor(colors.white)
        c.setFont("Helvetica-Bold", 9)
        x = _MARGIN
        for title, w in zip(COLUMNS, col_widths):
            c.drawString(x + 3, y, title)
            x += w
        c.setFillColor(colors.black)
        y -= _ROW_HEIGHT

    draw_header()
    c.setFont("Helvetica", 9)

    if not report.rows:
        c.drawString(_MARGIN + 3, y, "No attendance records found for the selected filters.")

    for i, row in enumerate(report.rows):
        if y < _MARGIN + _ROW_HEIGHT:
            c.showPage()
            y = height - _MARGIN
            draw_header()
            c.setFont("Helvetica", 9)

        if i % 2 == 1:
            c.setFillColor(colors.HexColor("#EEF2F8"))
            c.rect(_MARGIN, y - 4, usable, _ROW_HEIGHT, stroke=0, fill=1)
            c.setFillColor(colors.black)

        values = row_values(row)
        values[5] = f"{values[5]:.2f}"
        x = _MARGIN
        for value, w in zip(values, col_widths):
            c.drawString(x + 3, y, _fit(c, str(value), w - 6, "Helvetica", 9))
            x += w
        y -= _ROW_HEIGHT

    c.showPage()
    c.save()
    return buf.getvalue()
