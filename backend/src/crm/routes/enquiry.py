"""
Enquiry API Routes
Endpoints for creating, editing and listing enquiries
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from crm.dependencies.repositories import get_enquiry_repository
from crm.schemas.enquiry import (
    Assignee,
    EnquiryCreate,
    EnquiryFilter,
    EnquiryList,
    EnquiryResponse,
    EnquiryStatus,
    EnquiryUpdate,
    NotificationFlagUpdate,
    Segment,
)
from crm.services.analytics import filter_enquiries
from crm.services.enquiry_repository import EnquiryRepository

router = APIRouter(prefix="/enquiries", tags=["Enquiries"])


@router.post("/", response_model=EnquiryResponse, status_code=status.HTTP_201_CREATED)
def create_enquiry(
    enquiry_data: EnquiryCreate,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
):
    """Create an enquiry; the customer is reused or created from the contact number"""
    return enquiries.create(enquiry_data)


@router.get("/", response_model=EnquiryList)
def list_enquiries(
    assigned_to: Optional[Assignee] = None,
    status: Optional[EnquiryStatus] = None,
    segment: Optional[Segment] = None,
    customer_id: Optional[UUID] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
):
    """List enquiries, newest first, with optional filters"""
    items = enquiries.list(assigned_to=assigned_to)
    criteria = EnquiryFilter(
        status=status,
        segment=segment,
        customer_id=customer_id,
        from_date=from_date,
        to_date=to_date,
    )
    items = filter_enquiries(items, criteria)
    return {"enquiries": items, "total": len(items)}


@router.get("/{enquiry_id}", response_model=EnquiryResponse)
def get_enquiry(
    enquiry_id: UUID,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
):
    """Get a specific enquiry"""
    enquiry = enquiries.get(enquiry_id)
    if not enquiry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Enquiry with ID {enquiry_id} not found",
        )
    return enquiry


@router.patch("/{enquiry_id}", response_model=EnquiryResponse)
def update_enquiry(
    enquiry_id: UUID,
    enquiry_data: EnquiryUpdate,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
):
    """Update enquiry fields or move it to any status"""
    return enquiries.update(enquiry_id, enquiry_data)


@router.put("/{enquiry_id}/notification", response_model=EnquiryResponse)
def set_notification_flag(
    enquiry_id: UUID,
    flag_data: NotificationFlagUpdate,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
):
    """Show or hide the enquiry in the notification feed"""
    return enquiries.set_notification_flag(enquiry_id, flag_data.flagged)
