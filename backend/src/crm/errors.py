"""
Domain Errors
Failures raised by the store gateway and repositories
"""


class CRMError(Exception):
    """Base class for all CRM errors"""


class ContractViolation(CRMError, ValueError):
    """Caller supplied a request missing a required field (rejected before any store call)"""


class StoreError(CRMError):
    """The store could not serve a read"""


class WriteFailure(StoreError):
    """The store rejected an insert, update or delete"""


class RecordNotFound(CRMError):
    """The targeted row does not exist"""

    def __init__(self, table: str, record_id):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} row with ID {record_id} not found")
