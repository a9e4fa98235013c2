"""
Customer Repository
Customer reads and writes through the store gateway
"""

import logging
from typing import List, Optional
from uuid import UUID

from crm.errors import ContractViolation, RecordNotFound
from crm.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from crm.services.store_gateway import TableGateway

logger = logging.getLogger(__name__)

TABLE = "customers"


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class CustomerRepository:
    """Customers are keyed for lookup by their contact number"""

    def __init__(self, gateway: TableGateway):
        self.gateway = gateway

    def list(self) -> List[CustomerResponse]:
        rows = self.gateway.select(TABLE, order_by="name")
        return [CustomerResponse.model_validate(row) for row in rows]

    def get(self, customer_id: UUID) -> Optional[CustomerResponse]:
        row = self.gateway.select_one(TABLE, {"id": customer_id})
        return CustomerResponse.model_validate(row) if row else None

    def find_by_contact_number(self, contact_number: str) -> Optional[CustomerResponse]:
        """Find customer by contact number; None when there is no match"""
        row = self.gateway.select_one(TABLE, {"contact_number": contact_number.strip()})
        return CustomerResponse.model_validate(row) if row else None

    def create(self, draft: CustomerCreate) -> CustomerResponse:
        if _is_blank(draft.name) or _is_blank(draft.contact_number):
            raise ContractViolation("Customer name and contact number are required")

        data = draft.model_dump()
        data["contact_number"] = data["contact_number"].strip()
        row = self.gateway.insert(TABLE, data)
        logger.info(f"Created customer {row['id']} for {row['contact_number']}")
        return CustomerResponse.model_validate(row)

    def update(self, customer_id: UUID, patch: CustomerUpdate) -> CustomerResponse:
        changes = patch.model_dump(exclude_unset=True)
        for field in ("name", "contact_number"):
            if field in changes and _is_blank(changes[field]):
                raise ContractViolation(f"Customer {field} cannot be empty")

        if not changes:
            customer = self.get(customer_id)
            if customer is None:
                raise RecordNotFound(TABLE, customer_id)
            return customer

        row = self.gateway.update(TABLE, customer_id, changes)
        return CustomerResponse.model_validate(row)
