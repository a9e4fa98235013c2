"""
Export endpoints
Excel downloads of enquiries and customers
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from crm.dependencies.repositories import get_customer_repository, get_enquiry_repository
from crm.schemas.enquiry import Assignee, EnquiryFilter, EnquiryStatus, Segment
from crm.services.analytics import filter_enquiries
from crm.services.customer_repository import CustomerRepository
from crm.services.enquiry_repository import EnquiryRepository
from crm.services.excel_export import XLSX_MEDIA_TYPE, export_customers, export_enquiries, export_filename

router = APIRouter(prefix="/export", tags=["Export"])


def _xlsx_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/enquiries")
def export_enquiry_workbook(
    assigned_to: Optional[Assignee] = None,
    status: Optional[EnquiryStatus] = None,
    segment: Optional[Segment] = None,
    customer_id: Optional[UUID] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
):
    """Download enquiries (optionally filtered) as .xlsx"""
    criteria = EnquiryFilter(
        assigned_to=assigned_to,
        status=status,
        segment=segment,
        customer_id=customer_id,
        from_date=from_date,
        to_date=to_date,
    )
    items = filter_enquiries(enquiries.list(), criteria)
    return _xlsx_response(export_enquiries(items), export_filename("enquiries", criteria))


@router.get("/customers")
def export_customer_workbook(customers: CustomerRepository = Depends(get_customer_repository)):
    """Download all customers as .xlsx"""
    return _xlsx_response(export_customers(customers.list()), export_filename("customers"))
