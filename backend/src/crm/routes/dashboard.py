"""
Dashboard endpoints
Notification feed, aging alerts and analytics, computed over freshly fetched enquiries
"""

from typing import Optional

from fastapi import APIRouter, Depends

from crm.dependencies.repositories import get_enquiry_repository, get_flag_store
from crm.schemas.dashboard import AnalyticsReport, DashboardStats, NotificationFeed, StatusSummary, Timeframe
from crm.schemas.enquiry import Assignee
from crm.services.analytics import analytics_report, dashboard_stats
from crm.services.enquiry_repository import EnquiryRepository
from crm.services.flag_store import LocalFlagStore
from crm.services.notifications import build_notification_feed, summarize_status

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/notifications", response_model=NotificationFeed)
def get_notifications(
    assigned_to: Optional[Assignee] = None,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
    flag_store: LocalFlagStore = Depends(get_flag_store),
):
    """
    Today's reminders, upcoming reminders, pending actions and flagged enquiries
    """
    items = enquiries.list(assigned_to=assigned_to)
    flag_store.reconcile(items)
    return build_notification_feed(items, flag_store=flag_store)


@router.get("/status-summary", response_model=StatusSummary)
def get_status_summary(
    assigned_to: Optional[Assignee] = None,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
):
    """Overdue / approaching-deadline / on-track counts for alert badges"""
    return summarize_status(enquiries.list(assigned_to=assigned_to))


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    assigned_to: Optional[Assignee] = None,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
):
    """Headline statistics and chart breakdowns"""
    return dashboard_stats(enquiries.list(assigned_to=assigned_to))


@router.get("/analytics", response_model=AnalyticsReport)
def get_analytics(
    timeframe: Timeframe = Timeframe.ALL,
    assigned_to: Optional[Assignee] = None,
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
):
    """Analytics for the selected timeframe, across both assignees unless one is given"""
    return analytics_report(enquiries.list(assigned_to=assigned_to), timeframe)
