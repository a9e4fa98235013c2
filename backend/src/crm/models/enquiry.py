"""
Enquiry Model
A sales enquiry moving through the Lead -> Quote -> Won/Loss funnel
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, String, Text, Uuid

from crm.database import Base


class PersistedStatus(str, enum.Enum):
    """
    Status values the enquiries table can hold.
    "Formal Meeting" is not among them; see services.status_codec.
    """

    LEAD = "Lead"
    ENQUIRY = "Enquiry"
    QUOTE = "Quote"
    WON = "Won"
    LOSS = "Loss"


class Segment(str, enum.Enum):
    """Business segment of the enquiry"""

    AGRI = "Agri"
    CORPORATE = "Corporate"
    OTHERS = "Others"


class Assignee(str, enum.Enum):
    """Salesperson owning the enquiry"""

    AMIT = "Amit"
    PRATEEK = "Prateek"


class Enquiry(Base):
    """
    Enquiry Model
    Customer attributes are snapshotted at enquiry time and never follow later customer edits
    """

    __tablename__ = "enquiries"

    # Primary Key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Aging reference point
    date = Column(Date, nullable=False, index=True)
    segment = Column(SQLEnum(Segment, values_callable=lambda x: [e.value for e in x]), nullable=False)

    # Customer Association (weak; no cascade)
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("customers.id"), index=True)

    # Denormalized customer snapshot
    customer_name = Column(String(255), nullable=False)
    contact_number = Column(String(20), nullable=False, index=True)
    location = Column(String(255))
    meeting_person = Column(String(255))

    # Details
    requirement_details = Column(Text)
    remarks = Column(Text)

    # Funnel
    status = Column(
        SQLEnum(PersistedStatus, values_callable=lambda x: [e.value for e in x]),
        default=PersistedStatus.LEAD,
        nullable=False,
        index=True,
    )
    reminder_date = Column(Date)
    assigned_to = Column(
        SQLEnum(Assignee, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        index=True,
    )

    # Flags
    flagged_for_notification = Column(Boolean)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Enquiry(customer_name='{self.customer_name}', status='{self.status}', assigned_to='{self.assigned_to}')>"
