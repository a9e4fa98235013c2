"""
Analytics
Dashboard and analytics figures derived from an in-memory enquiry list
"""

import calendar
from datetime import date, datetime
from typing import Any, Iterable, List, Optional

from crm.schemas.dashboard import (
    AnalyticsReport,
    AssigneePerformance,
    BreakdownItem,
    DashboardStats,
    MonthlyTrend,
    Timeframe,
)
from crm.schemas.enquiry import CLOSED_STATUSES, Assignee, EnquiryFilter, EnquiryStatus, Segment
from crm.services.aging import coerce_date

TIMEFRAME_MONTHS = {
    Timeframe.MONTH: 1,
    Timeframe.QUARTER: 3,
    Timeframe.YEAR: 12,
}


def shift_months(day: date, months: int) -> date:
    """Move a date by whole months, clamping to the last day of the target month"""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def _percentage(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def _breakdown(values: List[Any], labels: Iterable[str]) -> List[BreakdownItem]:
    total = len(values)
    items = []
    for label in labels:
        count = sum(1 for value in values if value == label)
        items.append(BreakdownItem(label=label, count=count, percentage=_percentage(count, total)))
    return items


def status_breakdown(enquiries: List[Any]) -> List[BreakdownItem]:
    return _breakdown([e.status for e in enquiries], [s.value for s in EnquiryStatus])


def segment_breakdown(enquiries: List[Any]) -> List[BreakdownItem]:
    return _breakdown([e.segment for e in enquiries], [s.value for s in Segment])


def filter_enquiries(enquiries: Iterable[Any], criteria: EnquiryFilter) -> List[Any]:
    """Apply list-page filters; input order is preserved and date bounds are inclusive"""
    result = []
    for e in enquiries:
        if criteria.assigned_to is not None and e.assigned_to != criteria.assigned_to:
            continue
        if criteria.status is not None and e.status != criteria.status:
            continue
        if criteria.segment is not None and e.segment != criteria.segment:
            continue
        if criteria.customer_id is not None and e.customer_id != criteria.customer_id:
            continue
        if criteria.from_date or criteria.to_date:
            day = coerce_date(e.date)
            if day is None:
                continue
            if criteria.from_date and day < criteria.from_date:
                continue
            if criteria.to_date and day > criteria.to_date:
                continue
        result.append(e)
    return result


def dashboard_stats(enquiries: List[Any], now: Optional[datetime] = None) -> DashboardStats:
    """
    Headline numbers for the dashboard

    Args:
        enquiries: Decoded enquiries (usually one assignee's)
        now: Reference time for pending reminders

    Returns:
        DashboardStats
    """
    today = (now or datetime.now()).date()

    pending_reminders = 0
    for e in enquiries:
        reminder = coerce_date(e.reminder_date)
        if reminder is not None and reminder <= today and e.status not in CLOSED_STATUSES:
            pending_reminders += 1

    return DashboardStats(
        total_enquiries=len(enquiries),
        total_customers=len({e.customer_id for e in enquiries if e.customer_id is not None}),
        won_enquiries=sum(1 for e in enquiries if e.status == EnquiryStatus.WON),
        pending_reminders=pending_reminders,
        status_breakdown=status_breakdown(enquiries),
        segment_breakdown=segment_breakdown(enquiries),
    )


def filter_by_timeframe(enquiries: Iterable[Any], timeframe: Timeframe, now: Optional[datetime] = None) -> List[Any]:
    if timeframe == Timeframe.ALL:
        return list(enquiries)
    cutoff = shift_months((now or datetime.now()).date(), -TIMEFRAME_MONTHS[timeframe])
    result = []
    for e in enquiries:
        day = coerce_date(e.date)
        if day is not None and day >= cutoff:
            result.append(e)
    return result


def assignee_performance(enquiries: List[Any]) -> List[AssigneePerformance]:
    performance = []
    for assignee in Assignee:
        owned = [e for e in enquiries if e.assigned_to == assignee]
        won = sum(1 for e in owned if e.status == EnquiryStatus.WON)
        loss = sum(1 for e in owned if e.status == EnquiryStatus.LOSS)
        performance.append(
            AssigneePerformance(
                name=assignee.value,
                total=len(owned),
                won=won,
                loss=loss,
                conversion_rate=_percentage(won, won + loss),
            )
        )
    return performance


def monthly_trend(enquiries: List[Any], now: Optional[datetime] = None, months: int = 6) -> List[MonthlyTrend]:
    """Per-month totals for the last `months` months including the current one, oldest first"""
    this_month = (now or datetime.now()).date().replace(day=1)
    dated = [(coerce_date(e.date), e) for e in enquiries]

    trend = []
    for offset in range(months - 1, -1, -1):
        start = shift_months(this_month, -offset)
        in_month = [e for day, e in dated if day is not None and (day.year, day.month) == (start.year, start.month)]
        trend.append(
            MonthlyTrend(
                month=start.strftime("%b %Y"),
                total=len(in_month),
                won=sum(1 for e in in_month if e.status == EnquiryStatus.WON),
                loss=sum(1 for e in in_month if e.status == EnquiryStatus.LOSS),
            )
        )
    return trend


def analytics_report(
    enquiries: List[Any], timeframe: Timeframe = Timeframe.ALL, now: Optional[datetime] = None
) -> AnalyticsReport:
    """Analytics page figures; the monthly trend always spans the full list"""
    scoped = filter_by_timeframe(enquiries, timeframe, now)
    return AnalyticsReport(
        timeframe=timeframe,
        total_enquiries=len(scoped),
        status_breakdown=status_breakdown(scoped),
        segment_breakdown=segment_breakdown(scoped),
        assignees=assignee_performance(scoped),
        monthly_trend=monthly_trend(enquiries, now),
    )
