"""
Customer Pydantic Schemas
Request and response models for Customer endpoints
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


# Base Customer schema
class CustomerBase(BaseModel):
    """Base Customer schema with common fields"""

    name: str = Field(..., max_length=255)
    contact_number: str = Field(..., max_length=20)
    location: Optional[str] = None
    meeting_person: Optional[str] = None


# Create Customer schema
class CustomerCreate(CustomerBase):
    """Schema for creating a new customer"""


# Update Customer schema
class CustomerUpdate(BaseModel):
    """Schema for updating an existing customer"""

    name: Optional[str] = Field(None, max_length=255)
    contact_number: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = None
    meeting_person: Optional[str] = None


# Response Customer schema
class CustomerResponse(CustomerBase):
    """Schema for Customer responses"""

    id: UUID
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# List response
class CustomerList(BaseModel):
    """Schema for list of customers"""

    customers: List[CustomerResponse]
    total: int
