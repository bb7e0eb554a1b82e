import openpyxl
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter
from pathlib import Path
from typing import Iterable, Optional
import logging
from albapay.models.salary import RangeSummary
from albapay.models.shift import Shift
from albapay.processors.allowance_calculator import calculate_shift_pay
from albapay.utils.formatters import format_minutes, format_range
from albapay.config.settings import OUTPUT_DIR

logger = logging.getLogger(__name__)

SUMMARY_HEADERS = [
    "알바처", "근무 횟수", "근무 시간", "기본급", "야간수당", "휴일수당",
    "주휴수당", "세전 합계", "공제액", "세후 합계", "경고",
]
SHIFT_HEADERS = [
    "알바처", "날짜", "시작", "종료", "근무(분)", "휴게(분)", "야간(분)",
    "기본급", "야간수당", "휴일수당", "공휴일", "메모",
]
WON_FORMAT = '#,##0'


class SalaryReportGenerator:
    """Export range salary summaries to Excel"""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR / "reports"
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.bold_font = Font(bold=True)
        self.header_fill = PatternFill(start_color="B4C7E7", end_color="B4C7E7", fill_type="solid")
        self.thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

    def generate(self, summary: RangeSummary, shifts: Optional[Iterable[Shift]] = None) -> str:
        """Write the summary (and per-shift detail when shifts are given) to xlsx"""
        if not summary.per_workplace:
            raise ValueError("No shifts in the selected range")

        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "급여 요약"
        self._write_summary(ws, summary)

        if shifts is not None:
            self._write_shifts(wb.create_sheet("근무 내역"), summary, shifts)

        filename = f"salary_{summary.start.isoformat()}_{summary.end.isoformat()}.xlsx"
        filepath = self.output_dir / filename
        wb.save(filepath)

        logger.info("Salary report written to %s", filepath)
        return str(filepath)

    def _header_row(self, ws, row: int, headers):
        for col, title in enumerate(headers, start=1):
            cell = ws.cell(row=row, column=col, value=title)
            cell.font = self.bold_font
            cell.fill = self.header_fill
            cell.border = self.thin_border
            cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
            ws.column_dimensions[get_column_letter(col)].width = 14
        ws.column_dimensions['A'].width = 20

    def _write_summary(self, ws, summary: RangeSummary):
        ws['A1'] = f"기간별 수입 ({format_range(summary.start, summary.end)})"
        ws['A1'].font = Font(bold=True, size=12)

        row = 3
        self._header_row(ws, row, SUMMARY_HEADERS)
        ws.column_dimensions['K'].width = 60

        for item in summary.per_workplace:
            row += 1
            detail = item.detail
            values = [
                item.workplace.name or item.workplace.id,
                item.shift_count,
                format_minutes(detail.total_minutes),
                detail.basic_pay,
                detail.night_pay,
                detail.holiday_pay,
                detail.weekly_rest_pay,
                detail.total_before_tax,
                detail.deduction,
                detail.total_after_tax,
                "\n".join(detail.warnings),
            ]
            for col, value in enumerate(values, start=1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = self.thin_border
                if 4 <= col <= 10:
                    cell.number_format = WON_FORMAT
            ws.cell(row=row, column=11).alignment = Alignment(wrap_text=True, vertical='top')

        # TOTAL row
        row += 1
        ws.cell(row=row, column=1, value="합계")
        ws.cell(row=row, column=2, value=summary.total_shifts)
        ws.cell(row=row, column=3, value=f"{summary.total_hours}:00")
        for col, attr in zip(range(4, 11), ("basic_pay", "night_pay", "holiday_pay", "weekly_rest_pay",
                                            "total_before_tax", "deduction", "total_after_tax")):
            cell = ws.cell(row=row, column=col, value=sum(getattr(i.detail, attr) for i in summary.per_workplace))
            cell.number_format = WON_FORMAT
        for col in range(1, len(SUMMARY_HEADERS) + 1):
            cell = ws.cell(row=row, column=col)
            cell.font = self.bold_font
            cell.border = self.thin_border

    def _write_shifts(self, ws, summary: RangeSummary, shifts: Iterable[Shift]):
        self._header_row(ws, 1, SHIFT_HEADERS)
        workplaces = {item.workplace.id: item.workplace for item in summary.per_workplace}

        row = 1
        for shift in sorted(shifts, key=lambda s: (s.date, s.start_time)):
            workplace = workplaces.get(shift.workplace_id)
            if workplace is None or not summary.start <= shift.date <= summary.end:
                continue

            pay = calculate_shift_pay(shift, workplace)
            row += 1
            values = [
                workplace.name or workplace.id,
                shift.date.isoformat(),
                shift.start_time,
                shift.end_time,
                pay.work_minutes,
                pay.break_minutes,
                pay.night_minutes,
                pay.basic_pay,
                pay.night_pay,
                pay.holiday_pay,
                "Y" if shift.is_holiday else "",
                shift.memo,
            ]
            for col, value in enumerate(values, start=1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = self.thin_border
                if 8 <= col <= 10:
                    cell.number_format = WON_FORMAT
