"""
Notification Aggregator
Builds the dashboard notification feed and the aging status summary
from a collection of decoded enquiries.

One bad record must never blank a dashboard: enquiries with unreadable
dates drop out of date-based categories only.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional

from crm.config import settings
from crm.schemas.dashboard import AgingBucket, NotificationFeed, StatusSummary
from crm.schemas.enquiry import CLOSED_STATUSES, OPEN_STATUSES, EnquiryStatus
from crm.services.aging import classify, coerce_date, elapsed_days
from crm.services.flag_store import LocalFlagStore

logger = logging.getLogger(__name__)


def _status_of(enquiry: Any) -> Optional[EnquiryStatus]:
    try:
        return EnquiryStatus(getattr(enquiry, "status", None))
    except ValueError:
        return None


def _for_assignee(enquiries: Iterable[Any], assigned_to) -> List[Any]:
    if assigned_to is None:
        return list(enquiries)
    return [e for e in enquiries if getattr(e, "assigned_to", None) == assigned_to]


def is_flagged(enquiry: Any, flag_store: Optional[LocalFlagStore] = None) -> bool:
    """
    Stored flag wins; the local store is only consulted when the stored
    value is not explicitly False.
    """
    stored = getattr(enquiry, "flagged_for_notification", None)
    if stored is True:
        return True
    if stored is not False and flag_store is not None:
        return flag_store.is_flagged(enquiry.id)
    return False


def build_notification_feed(
    enquiries: Iterable[Any],
    now: Optional[datetime] = None,
    assigned_to=None,
    flag_store: Optional[LocalFlagStore] = None,
    window_days: Optional[int] = None,
) -> NotificationFeed:
    """
    Build the categorized notification feed

    Args:
        enquiries: Decoded enquiries, already in display order
        now: Reference time (defaults to now)
        assigned_to: Restrict to one assignee
        flag_store: Local fallback for the notification flag
        window_days: Upcoming-reminder horizon in days

    Returns:
        NotificationFeed with per-category lists in input order
    """
    now = now or datetime.now()
    today = now.date()
    horizon = today + timedelta(days=window_days if window_days is not None else settings.REMINDER_WINDOW_DAYS)

    feed = NotificationFeed()
    for enquiry in _for_assignee(enquiries, assigned_to):
        status = _status_of(enquiry)
        raw_reminder = getattr(enquiry, "reminder_date", None)
        reminder = coerce_date(raw_reminder)

        if status is not None and status not in CLOSED_STATUSES and reminder is not None:
            if reminder == today:
                feed.today_reminders.append(enquiry)
            elif today < reminder <= horizon:
                feed.upcoming_reminders.append(enquiry)

        if status in OPEN_STATUSES and not raw_reminder:
            feed.pending_actions.append(enquiry)

        if is_flagged(enquiry, flag_store):
            feed.flagged.append(enquiry)

    feed.total = (
        len(feed.today_reminders) + len(feed.upcoming_reminders) + len(feed.pending_actions) + len(feed.flagged)
    )
    return feed


def summarize_status(
    enquiries: Iterable[Any],
    now: Optional[datetime] = None,
    assigned_to=None,
) -> StatusSummary:
    """Reduce aging classification over a collection to overdue/warning/on-track counts"""
    now = now or datetime.now()
    summary = StatusSummary()

    for enquiry in _for_assignee(enquiries, assigned_to):
        status = _status_of(enquiry)
        if status is None:
            logger.warning(f"Skipping enquiry {getattr(enquiry, 'id', None)} with unknown status")
            continue
        if status in CLOSED_STATUSES:
            summary.closed += 1
            continue

        reference = coerce_date(getattr(enquiry, "date", None))
        if reference is None:
            logger.warning(f"Skipping enquiry {getattr(enquiry, 'id', None)} with unreadable date")
            continue

        bucket = classify(status, elapsed_days(reference, now))
        if bucket == AgingBucket.OVERDUE:
            summary.overdue += 1
            summary.overdue_by_status[status] = summary.overdue_by_status.get(status, 0) + 1
        elif bucket == AgingBucket.WARNING:
            summary.warning += 1
            summary.warning_by_status[status] = summary.warning_by_status.get(status, 0) + 1
        else:
            summary.on_track += 1

    return summary
