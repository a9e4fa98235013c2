"""
Enquiry Pydantic Schemas
Request and response models for Enquiry endpoints
"""

import datetime as dt
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


# Logical status; one more value than the enquiries table can store
class EnquiryStatus(str, Enum):
    LEAD = "Lead"
    ENQUIRY = "Enquiry"
    FORMAL_MEETING = "Formal Meeting"
    QUOTE = "Quote"
    WON = "Won"
    LOSS = "Loss"


class Segment(str, Enum):
    AGRI = "Agri"
    CORPORATE = "Corporate"
    OTHERS = "Others"


class Assignee(str, Enum):
    AMIT = "Amit"
    PRATEEK = "Prateek"


CLOSED_STATUSES = frozenset({EnquiryStatus.WON, EnquiryStatus.LOSS})
OPEN_STATUSES = frozenset(set(EnquiryStatus) - CLOSED_STATUSES)


# Base Enquiry schema
class EnquiryBase(BaseModel):
    """Base Enquiry schema with common fields"""

    date: dt.date
    segment: Segment
    customer_name: str = Field(..., max_length=255)
    contact_number: str = Field(..., max_length=20)
    location: Optional[str] = None
    meeting_person: Optional[str] = None
    requirement_details: Optional[str] = None
    status: EnquiryStatus = EnquiryStatus.LEAD
    remarks: Optional[str] = None
    reminder_date: Optional[dt.date] = None
    assigned_to: Assignee
    flagged_for_notification: Optional[bool] = None


# Create Enquiry schema
class EnquiryCreate(EnquiryBase):
    """Schema for creating a new enquiry (customer is resolved by contact number)"""

    customer_id: Optional[UUID] = None


# Update Enquiry schema
class EnquiryUpdate(BaseModel):
    """Schema for patching an existing enquiry; any status may follow any other"""

    date: Optional[dt.date] = None
    segment: Optional[Segment] = None
    customer_name: Optional[str] = Field(None, max_length=255)
    contact_number: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = None
    meeting_person: Optional[str] = None
    requirement_details: Optional[str] = None
    status: Optional[EnquiryStatus] = None
    remarks: Optional[str] = None
    reminder_date: Optional[dt.date] = None
    assigned_to: Optional[Assignee] = None
    flagged_for_notification: Optional[bool] = None


# Response Enquiry schema
class EnquiryResponse(EnquiryBase):
    """Schema for Enquiry responses (status and remarks already decoded)"""

    id: UUID
    customer_id: Optional[UUID] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


# List response
class EnquiryList(BaseModel):
    """Schema for list of enquiries"""

    enquiries: List[EnquiryResponse]
    total: int


# Enquiry search/filter schema
class EnquiryFilter(BaseModel):
    """Schema for filtering enquiries"""

    assigned_to: Optional[Assignee] = None
    status: Optional[EnquiryStatus] = None
    segment: Optional[Segment] = None
    customer_id: Optional[UUID] = None
    from_date: Optional[dt.date] = None
    to_date: Optional[dt.date] = None


class NotificationFlagUpdate(BaseModel):
    """Schema for toggling the "show in notification" flag"""

    flagged: bool
