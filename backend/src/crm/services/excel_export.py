"""
Excel Export
Writes enquiry and customer lists to .xlsx workbooks with openpyxl
"""

import io
import logging
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Tuple

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from crm.schemas.enquiry import EnquiryFilter

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="2F5496", end_color="2F5496", fill_type="solid")

# (header, column width)
ENQUIRY_COLUMNS: List[Tuple[str, int]] = [
    ("S.No.", 8),
    ("Date", 12),
    ("Customer Name", 20),
    ("Mobile Number", 15),
    ("Location", 15),
    ("Meeting Person", 15),
    ("Segment", 12),
    ("Status", 14),
    ("Requirement Details", 30),
    ("Remarks", 20),
    ("Assigned To", 12),
    ("Reminder Date", 12),
    ("Show in Notification", 15),
    ("Created At", 12),
]

CUSTOMER_COLUMNS: List[Tuple[str, int]] = [
    ("S.No.", 8),
    ("Customer Name", 20),
    ("Mobile Number", 15),
    ("Location", 20),
    ("Meeting Person", 15),
    ("Created At", 12),
]


def format_date(value: Any) -> str:
    """dd/mm/yyyy, or empty when there is no date"""
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")
    return ""


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value.value if hasattr(value, "value") else str(value)


def _build_workbook(title: str, columns: List[Tuple[str, int]], rows: Iterable[List[Any]]) -> bytes:
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = title

    sheet.append([header for header, _ in columns])
    for col, (_, width) in enumerate(columns, 1):
        cell = sheet.cell(row=1, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")
        sheet.column_dimensions[get_column_letter(col)].width = width

    for row in rows:
        sheet.append(row)

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def export_enquiries(enquiries: List[Any]) -> bytes:
    """
    Export decoded enquiries to an .xlsx workbook

    Args:
        enquiries: Enquiries in the order they should appear

    Returns:
        Workbook bytes
    """
    logger.info(f"Exporting {len(enquiries)} enquiries to Excel")
    rows = (
        [
            index,
            format_date(e.date),
            _text(e.customer_name),
            _text(e.contact_number),
            _text(e.location),
            _text(e.meeting_person),
            _text(e.segment),
            _text(e.status),
            _text(e.requirement_details),
            _text(e.remarks),
            _text(e.assigned_to),
            format_date(e.reminder_date),
            "Yes" if e.flagged_for_notification else "No",
            format_date(e.created_at),
        ]
        for index, e in enumerate(enquiries, 1)
    )
    return _build_workbook("Enquiries", ENQUIRY_COLUMNS, rows)


def export_customers(customers: List[Any]) -> bytes:
    logger.info(f"Exporting {len(customers)} customers to Excel")
    rows = (
        [
            index,
            _text(c.name),
            _text(c.contact_number),
            _text(c.location),
            _text(c.meeting_person),
            format_date(c.created_at),
        ]
        for index, c in enumerate(customers, 1)
    )
    return _build_workbook("Customers", CUSTOMER_COLUMNS, rows)


def export_filename(prefix: str, criteria: Optional[EnquiryFilter] = None, today: Optional[date] = None) -> str:
    """e.g. enquiries_Amit_Quote_filtered_2026-10-19.xlsx"""
    today = today or date.today()
    suffix = ""
    if criteria is not None:
        for value in (criteria.assigned_to, criteria.status, criteria.segment):
            if value is not None:
                suffix += f"_{_text(value)}"
        if criteria.from_date or criteria.to_date:
            suffix += "_filtered"
    return f"{prefix}{suffix}_{today.isoformat()}.xlsx"
