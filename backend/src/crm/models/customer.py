"""
Customer Model
Represents a customer identified by their contact number
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Uuid

from crm.database import Base


class Customer(Base):
    """
    Customer Model
    Created implicitly the first time an enquiry arrives from a new contact number
    """

    __tablename__ = "customers"

    # Primary Key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Contact Information
    name = Column(String(255), nullable=False)
    contact_number = Column(String(20), nullable=False, unique=True, index=True)
    location = Column(String(255))

    # Filled lazily by the first enquiry that supplies it
    meeting_person = Column(String(255))

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Customer(name='{self.name}', contact_number='{self.contact_number}')>"
