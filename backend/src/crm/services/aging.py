"""
Aging Classifier
Classifies how urgently an open enquiry needs to move to its next status,
based on calendar days elapsed since the enquiry date.
"""

import math
from datetime import date, datetime, time
from typing import Any, Optional

from crm.errors import ContractViolation
from crm.schemas.dashboard import AgingBucket
from crm.schemas.enquiry import CLOSED_STATUSES, EnquiryStatus

SECONDS_PER_DAY = 24 * 60 * 60

# status -> (first warning day, last warning day); overdue after the last
AGING_THRESHOLDS = {
    EnquiryStatus.LEAD: (5, 7),
    EnquiryStatus.ENQUIRY: (5, 7),
    EnquiryStatus.FORMAL_MEETING: (5, 7),
    EnquiryStatus.QUOTE: (12, 15),
}


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of a stored date value; None when unusable"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            return None
    return None


def elapsed_days(reference: date, now: Optional[datetime] = None) -> int:
    """
    Days between reference (taken at midnight) and now, rounded up.
    Any part of a day counts as a whole day.
    """
    now = now or datetime.now()
    if isinstance(reference, datetime):
        start = reference
        if start.tzinfo is None and now.tzinfo is not None:
            start = start.replace(tzinfo=now.tzinfo)
    else:
        start = datetime.combine(reference, time.min, tzinfo=now.tzinfo)
    seconds = abs((now - start).total_seconds())
    return math.ceil(seconds / SECONDS_PER_DAY)


def classify(status: Any, elapsed: int) -> AgingBucket:
    """
    Classify an enquiry by status and elapsed days

    Args:
        status: Logical enquiry status
        elapsed: Whole days since the enquiry date

    Returns:
        AgingBucket; closed statuses are always ON_TRACK
    """
    try:
        status = EnquiryStatus(status)
    except ValueError:
        raise ContractViolation(f"Unknown enquiry status: {status!r}")

    if status in CLOSED_STATUSES:
        return AgingBucket.ON_TRACK

    warning_from, warning_to = AGING_THRESHOLDS[status]
    if elapsed > warning_to:
        return AgingBucket.OVERDUE
    if elapsed >= warning_from:
        return AgingBucket.WARNING
    return AgingBucket.ON_TRACK


def classify_enquiry(enquiry: Any, now: Optional[datetime] = None) -> Optional[AgingBucket]:
    """Classify an enquiry object; None when its date cannot be read"""
    reference = coerce_date(getattr(enquiry, "date", None))
    if reference is None:
        return None
    return classify(enquiry.status, elapsed_days(reference, now))
