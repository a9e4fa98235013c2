"""
Pydantic Schemas Package
Exports all request/response schemas
"""

from crm.schemas.customer import (
    CustomerCreate,
    CustomerList,
    CustomerResponse,
    CustomerUpdate,
)
from crm.schemas.dashboard import (
    AgingBucket,
    AnalyticsReport,
    AssigneePerformance,
    BreakdownItem,
    DashboardStats,
    MonthlyTrend,
    NotificationFeed,
    StatusSummary,
    Timeframe,
)
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
from crm.schemas.task import (
    TaskCreate,
    TaskList,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
)

__all__ = [
    # Customer schemas
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
    "CustomerList",
    # Enquiry schemas
    "EnquiryCreate",
    "EnquiryUpdate",
    "EnquiryResponse",
    "EnquiryList",
    "EnquiryFilter",
    "EnquiryStatus",
    "NotificationFlagUpdate",
    "Segment",
    "Assignee",
    # Task schemas
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskList",
    "TaskStatus",
    # Dashboard schemas
    "AgingBucket",
    "NotificationFeed",
    "StatusSummary",
    "BreakdownItem",
    "DashboardStats",
    "AssigneePerformance",
    "MonthlyTrend",
    "AnalyticsReport",
    "Timeframe",
]
