"""
Enquiry Repository
The single read/write path for enquiries. Resolves the customer by contact
number, applies the status codec on the way in and out, and back-fills the
customer's meeting person when an enquiry supplies one.

Writes are not transactional: a customer created or back-filled before a
failed enquiry insert stays behind.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from crm.errors import ContractViolation, RecordNotFound
from crm.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from crm.schemas.enquiry import EnquiryCreate, EnquiryResponse, EnquiryUpdate
from crm.services import status_codec
from crm.services.customer_repository import CustomerRepository
from crm.services.flag_store import LocalFlagStore
from crm.services.store_gateway import TableGateway

logger = logging.getLogger(__name__)

TABLE = "enquiries"

REQUIRED_FIELDS = ("contact_number", "customer_name", "status", "assigned_to", "date")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _decode_row(row: Dict[str, Any]) -> EnquiryResponse:
    status, remarks = status_codec.decode(row["status"], row.get("remarks"))
    return EnquiryResponse.model_validate({**row, "status": status, "remarks": remarks})


class EnquiryRepository:
    """Orchestrates customer resolution, status encoding and the store round trip"""

    def __init__(
        self,
        gateway: TableGateway,
        customers: Optional[CustomerRepository] = None,
        flag_store: Optional[LocalFlagStore] = None,
    ):
        self.gateway = gateway
        self.customers = customers or CustomerRepository(gateway)
        self.flag_store = flag_store

    # Reads

    def list(self, assigned_to=None) -> List[EnquiryResponse]:
        """All enquiries, newest date first, statuses decoded"""
        filters = {"assigned_to": assigned_to} if assigned_to is not None else None
        rows = self.gateway.select(TABLE, filters, order_by="date", descending=True)
        return [_decode_row(row) for row in rows]

    def get(self, enquiry_id: UUID) -> Optional[EnquiryResponse]:
        row = self.gateway.select_one(TABLE, {"id": enquiry_id})
        return _decode_row(row) if row else None

    def find_customer_by_contact_number(self, contact_number: str) -> Optional[CustomerResponse]:
        return self.customers.find_by_contact_number(contact_number)

    # Writes

    def create(self, draft: EnquiryCreate) -> EnquiryResponse:
        """
        Create an enquiry, reusing or creating its customer

        Args:
            draft: Enquiry as entered

        Returns:
            Stored enquiry with decoded status
        """
        data = draft.model_dump()
        missing = [field for field in REQUIRED_FIELDS if _is_blank(data.get(field))]
        if missing:
            raise ContractViolation(f"Missing required fields: {', '.join(missing)}")

        data["contact_number"] = data["contact_number"].strip()
        customer = self._resolve_customer(data)
        data["customer_id"] = customer.id

        data["status"], data["remarks"] = status_codec.encode(data["status"], data.get("remarks"))
        row = self.gateway.insert(TABLE, data)
        return _decode_row(row)

    def update(self, enquiry_id: UUID, patch: EnquiryUpdate) -> EnquiryResponse:
        """
        Patch an enquiry. No transition rules: any status may follow any other.
        """
        changes = patch.model_dump(exclude_unset=True)
        blank = [field for field in REQUIRED_FIELDS if field in changes and _is_blank(changes[field])]
        if blank:
            raise ContractViolation(f"Required fields cannot be cleared: {', '.join(blank)}")

        if "status" in changes or "remarks" in changes:
            if "status" in changes and "remarks" in changes:
                status, remarks = changes["status"], changes["remarks"]
            else:
                # The other half of the pair lives in the stored row
                current = self.gateway.select_one(TABLE, {"id": enquiry_id})
                if current is None:
                    raise RecordNotFound(TABLE, enquiry_id)
                current_status, current_remarks = status_codec.decode(current["status"], current.get("remarks"))
                status = changes.get("status", current_status)
                remarks = changes["remarks"] if "remarks" in changes else current_remarks
            changes["status"], changes["remarks"] = status_codec.encode(status, remarks)

        row = self.gateway.update(TABLE, enquiry_id, changes)
        enquiry = _decode_row(row)

        meeting_person = changes.get("meeting_person")
        if not _is_blank(meeting_person) and enquiry.customer_id is not None:
            self._backfill_on_update(enquiry.customer_id, meeting_person.strip())

        return enquiry

    def set_notification_flag(self, enquiry_id: UUID, flagged: bool) -> EnquiryResponse:
        """
        Toggle "show in notification". The local store holds the value until
        the database confirms it, so a failed write still shows on this client.
        """
        if self.flag_store is not None:
            self.flag_store.remember(enquiry_id, flagged)

        try:
            enquiry = self.update(enquiry_id, EnquiryUpdate(flagged_for_notification=flagged))
        except RecordNotFound:
            # No row will ever confirm this entry
            if self.flag_store is not None:
                self.flag_store.discard(enquiry_id)
            raise

        if self.flag_store is not None and enquiry.flagged_for_notification is flagged:
            self.flag_store.discard(enquiry_id)
        return enquiry

    # Customer side effects

    def _resolve_customer(self, data: Dict[str, Any]) -> CustomerResponse:
        existing = self.customers.find_by_contact_number(data["contact_number"])
        if existing is None:
            customer = self.customers.create(
                CustomerCreate(
                    name=data["customer_name"],
                    contact_number=data["contact_number"],
                    location=data.get("location"),
                    meeting_person=data.get("meeting_person"),
                )
            )
            return customer

        logger.info(f"Reusing customer {existing.id} for {existing.contact_number}")
        supplied_person = data.get("meeting_person")
        data["location"] = existing.location or data.get("location")
        data["meeting_person"] = existing.meeting_person or supplied_person

        if not _is_blank(supplied_person) and _is_blank(existing.meeting_person):
            self._backfill(existing.id, supplied_person.strip())
        return existing

    def _backfill_on_update(self, customer_id: UUID, meeting_person: str):
        try:
            customer = self.customers.get(customer_id)
        except Exception as e:
            logger.warning(f"Could not load customer {customer_id} for back-fill: {str(e)}", exc_info=True)
            return
        if customer is not None and customer.meeting_person != meeting_person:
            self._backfill(customer_id, meeting_person)

    def _backfill(self, customer_id: UUID, meeting_person: str):
        """Failure here is logged and never fails the enquiry write"""
        try:
            self.customers.update(customer_id, CustomerUpdate(meeting_person=meeting_person))
            logger.info(f"Back-filled meeting person for customer {customer_id}")
        except Exception as e:
            logger.warning(f"Failed to back-fill meeting person for customer {customer_id}: {str(e)}", exc_info=True)
