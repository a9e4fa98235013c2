"""
Customer API Routes
Endpoints for managing customers
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from crm.dependencies.repositories import get_customer_repository
from crm.schemas.customer import CustomerCreate, CustomerList, CustomerResponse, CustomerUpdate
from crm.services.customer_repository import CustomerRepository

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("/", response_model=CustomerList)
def list_customers(customers: CustomerRepository = Depends(get_customer_repository)):
    """List customers ordered by name"""
    items = customers.list()
    return {"customers": items, "total": len(items)}


@router.post("/", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    customer_data: CustomerCreate,
    customers: CustomerRepository = Depends(get_customer_repository),
):
    """Create a new customer"""
    if customers.find_by_contact_number(customer_data.contact_number) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Customer with number {customer_data.contact_number} already exists",
        )
    return customers.create(customer_data)


@router.get("/number/{contact_number}", response_model=CustomerResponse)
def get_customer_by_number(
    contact_number: str,
    customers: CustomerRepository = Depends(get_customer_repository),
):
    """Find customer by contact number"""
    customer = customers.find_by_contact_number(contact_number)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Customer with number {contact_number} not found",
        )
    return customer


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: UUID,
    customers: CustomerRepository = Depends(get_customer_repository),
):
    """Get a specific customer"""
    customer = customers.get(customer_id)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Customer with ID {customer_id} not found",
        )
    return customer


@router.patch("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: UUID,
    customer_data: CustomerUpdate,
    customers: CustomerRepository = Depends(get_customer_repository),
):
    """Update customer information"""
    if customer_data.contact_number is not None:
        existing = customers.find_by_contact_number(customer_data.contact_number)
        if existing is not None and existing.id != customer_id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Customer with number {customer_data.contact_number} already exists",
            )
    return customers.update(customer_id, customer_data)
