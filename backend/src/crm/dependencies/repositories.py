"""
Repository Dependencies
FastAPI providers wiring the store gateway and repositories to a request session
"""

import threading
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from crm.config import settings
from crm.database import get_db
from crm.services.customer_repository import CustomerRepository
from crm.services.enquiry_repository import EnquiryRepository
from crm.services.flag_store import LocalFlagStore
from crm.services.store_gateway import TableGateway
from crm.services.task_repository import TaskRepository

# Process-wide; mirrors the browser-local store of a single client
_flag_store: Optional[LocalFlagStore] = None
_flag_store_lock = threading.Lock()


def get_flag_store() -> LocalFlagStore:
    global _flag_store
    if _flag_store is None:
        with _flag_store_lock:
            if _flag_store is None:
                _flag_store = LocalFlagStore(settings.FLAG_STORE_PATH)
    return _flag_store


def get_gateway(db: Session = Depends(get_db)) -> TableGateway:
    return TableGateway(db)


def get_customer_repository(gateway: TableGateway = Depends(get_gateway)) -> CustomerRepository:
    return CustomerRepository(gateway)


def get_enquiry_repository(
    gateway: TableGateway = Depends(get_gateway),
    customers: CustomerRepository = Depends(get_customer_repository),
    flag_store: LocalFlagStore = Depends(get_flag_store),
) -> EnquiryRepository:
    return EnquiryRepository(gateway, customers, flag_store)


def get_task_repository(
    gateway: TableGateway = Depends(get_gateway),
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
) -> TaskRepository:
    return TaskRepository(gateway, enquiries)
