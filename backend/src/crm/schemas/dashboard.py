"""
Dashboard Pydantic Schemas
Notification feed, aging summary and analytics payloads
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel

from crm.schemas.enquiry import EnquiryResponse, EnquiryStatus


class AgingBucket(str, Enum):
    ON_TRACK = "on_track"
    WARNING = "warning"  # approaching the deadline
    OVERDUE = "overdue"


class Timeframe(str, Enum):
    ALL = "all"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class NotificationFeed(BaseModel):
    """
    Categorized notification feed.
    An enquiry appears in every category it qualifies for; total is the sum of category sizes.
    """

    today_reminders: List[EnquiryResponse] = []
    upcoming_reminders: List[EnquiryResponse] = []
    pending_actions: List[EnquiryResponse] = []
    flagged: List[EnquiryResponse] = []
    total: int = 0


class StatusSummary(BaseModel):
    """Aging classification reduced to alert-badge counts"""

    overdue: int = 0
    warning: int = 0
    on_track: int = 0
    closed: int = 0
    overdue_by_status: Dict[EnquiryStatus, int] = {}
    warning_by_status: Dict[EnquiryStatus, int] = {}


class BreakdownItem(BaseModel):
    """One slice of a status or segment chart"""

    label: str
    count: int
    percentage: float


class DashboardStats(BaseModel):
    """Headline dashboard numbers"""

    total_enquiries: int
    total_customers: int
    won_enquiries: int
    pending_reminders: int
    status_breakdown: List[BreakdownItem]
    segment_breakdown: List[BreakdownItem]


class AssigneePerformance(BaseModel):
    name: str
    total: int
    won: int
    loss: int
    conversion_rate: float


class MonthlyTrend(BaseModel):
    month: str
    total: int
    won: int
    loss: int


class AnalyticsReport(BaseModel):
    """Analytics page payload"""

    timeframe: Timeframe
    total_enquiries: int
    status_breakdown: List[BreakdownItem]
    segment_breakdown: List[BreakdownItem]
    assignees: List[AssigneePerformance]
    monthly_trend: List[MonthlyTrend]
