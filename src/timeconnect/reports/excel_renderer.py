from __future__ import annotations

import io

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .columns import COLUMNS, row_values
from .service import ReportData

SHEET_NAME = "Attendance"

_THIN = Side(style="thin", color="999999")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
_HEADER_FILL = PatternFill("solid", fgColor="2F5597")
_HEADER_FONT = Font(bold=True, color="FFFFFF")


def render_excel(report: ReportData) -> bytes:
    df = pd.DataFrame([row_values(r) for r in report.rows], columns=list(COLUMNS))

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
        ws = writer.sheets[SHEET_NAME]

        for cell in ws[1]:
            cell.fill = _HEADER_FILL
            cell.font = _HEADER_FONT
            cell.alignment = Alignment(horizontal="center")

        for row in ws.iter_rows(min_row=1, max_row=len(df) + 1, max_col=len(COLUMNS)):
            for cell in row:
                cell.border = _BORDER

        for idx, title in enumerate(COLUMNS, start=1):
            values = [str(title)] + [str(v) for v in df[title].tolist()]
            ws.column_dimensions[get_column_letter(idx)].width = min(max(len(v) for v in values) + 2, 50)

        # summary block two rows under the table
        start = len(df) + 3
        s = report.summary
        for offset, (label, value) in enumerate(
            [
                ("Total Records", s.total_records),
                ("Total Hours", float(s.total_hours)),
                ("Average Hours", float(s.average_hours)),
            ]
        ):
            label_cell = ws.cell(row=start + offset, column=1, value=label)
            label_cell.font = Font(bold=True)
            ws.cell(row=start + offset, column=2, value=value)

    return output.getvalue()
