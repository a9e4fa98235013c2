"""
Tests for dashboard statistics and analytics
"""

from datetime import date, timedelta

import pytest

from conftest import NOW, TODAY, days_ago, fake, make_enquiry
from crm.schemas.dashboard import Timeframe
from crm.schemas.enquiry import Assignee, EnquiryFilter, EnquiryStatus, Segment
from crm.services.analytics import (
    analytics_report,
    assignee_performance,
    dashboard_stats,
    filter_by_timeframe,
    filter_enquiries,
    monthly_trend,
    segment_breakdown,
    shift_months,
    status_breakdown,
)


def by_label(items):
    return {item.label: item for item in items}


class TestShiftMonths:
    @pytest.mark.parametrize(
        "day,months,expected",
        [
            (date(2026, 10, 19), -1, date(2026, 9, 19)),
            (date(2026, 3, 31), -1, date(2026, 2, 28)),
            (date(2026, 1, 15), -3, date(2025, 10, 15)),
            (date(2026, 10, 19), -12, date(2025, 10, 19)),
            (date(2026, 11, 30), 3, date(2027, 2, 28)),
        ],
    )
    def test_shift(self, day, months, expected):
        assert shift_months(day, months) == expected


class TestBreakdowns:
    def test_status_breakdown_covers_every_status(self):
        enquiries = [
            make_enquiry(status=EnquiryStatus.WON),
            make_enquiry(status=EnquiryStatus.WON),
            make_enquiry(status=EnquiryStatus.FORMAL_MEETING),
            make_enquiry(status=EnquiryStatus.LEAD),
        ]

        items = by_label(status_breakdown(enquiries))

        assert list(items) == ["Lead", "Enquiry", "Formal Meeting", "Quote", "Won", "Loss"]
        assert items["Won"].count == 2
        assert items["Won"].percentage == 50.0
        assert items["Formal Meeting"].count == 1
        assert items["Quote"].percentage == 0.0

    def test_segment_breakdown_rounds(self):
        enquiries = [
            make_enquiry(segment=Segment.AGRI),
            make_enquiry(segment=Segment.CORPORATE),
            make_enquiry(segment=Segment.CORPORATE),
        ]

        items = by_label(segment_breakdown(enquiries))

        assert items["Corporate"].percentage == 66.7
        assert items["Agri"].percentage == 33.3
        assert items["Others"].count == 0

    def test_empty_list(self):
        assert all(item.percentage == 0.0 for item in status_breakdown([]))


class TestFilterEnquiries:
    def test_combined_criteria(self):
        match = make_enquiry(assigned_to=Assignee.AMIT, status=EnquiryStatus.QUOTE, date=days_ago(3))
        wrong_status = make_enquiry(assigned_to=Assignee.AMIT, date=days_ago(3))
        too_old = make_enquiry(assigned_to=Assignee.AMIT, status=EnquiryStatus.QUOTE, date=days_ago(30))
        other = make_enquiry(assigned_to=Assignee.PRATEEK, status=EnquiryStatus.QUOTE, date=days_ago(3))

        criteria = EnquiryFilter(assigned_to=Assignee.AMIT, status=EnquiryStatus.QUOTE, from_date=days_ago(7))

        assert filter_enquiries([match, wrong_status, too_old, other], criteria) == [match]

    def test_date_bounds_inclusive(self):
        first = make_enquiry(date=days_ago(7))
        last = make_enquiry(date=days_ago(1))
        outside = make_enquiry(date=TODAY)

        criteria = EnquiryFilter(from_date=days_ago(7), to_date=days_ago(1))

        assert filter_enquiries([first, last, outside], criteria) == [first, last]

    def test_customer_and_segment(self):
        customer_id = fake.uuid4(cast_to=None)
        match = make_enquiry(customer_id=customer_id, segment=Segment.OTHERS)
        other = make_enquiry(segment=Segment.OTHERS)

        criteria = EnquiryFilter(customer_id=customer_id, segment=Segment.OTHERS)

        assert filter_enquiries([match, other], criteria) == [match]

    def test_no_criteria_keeps_everything(self):
        items = [make_enquiry() for _ in range(3)]
        assert filter_enquiries(items, EnquiryFilter()) == items


class TestDashboardStats:
    def test_headline_numbers(self):
        customer_id = fake.uuid4(cast_to=None)
        enquiries = [
            make_enquiry(customer_id=customer_id, status=EnquiryStatus.WON, reminder_date=days_ago(1)),
            make_enquiry(customer_id=customer_id, reminder_date=TODAY),
            make_enquiry(customer_id=fake.uuid4(cast_to=None), reminder_date=days_ago(2)),
            make_enquiry(reminder_date=TODAY + timedelta(days=1)),
        ]

        stats = dashboard_stats(enquiries, NOW)

        assert stats.total_enquiries == 4
        assert stats.total_customers == 2
        assert stats.won_enquiries == 1
        assert stats.pending_reminders == 2


class TestAnalytics:
    def test_timeframe_cutoff_is_inclusive(self):
        on_cutoff = make_enquiry(date=date(2026, 9, 19))
        before = make_enquiry(date=date(2026, 9, 18))

        assert filter_by_timeframe([on_cutoff, before], Timeframe.MONTH, NOW) == [on_cutoff]
        assert filter_by_timeframe([on_cutoff, before], Timeframe.ALL, NOW) == [on_cutoff, before]

    def test_assignee_conversion_rate(self):
        enquiries = [
            make_enquiry(assigned_to=Assignee.AMIT, status=EnquiryStatus.WON),
            make_enquiry(assigned_to=Assignee.AMIT, status=EnquiryStatus.WON),
            make_enquiry(assigned_to=Assignee.AMIT, status=EnquiryStatus.LOSS),
            make_enquiry(assigned_to=Assignee.AMIT, status=EnquiryStatus.QUOTE),
        ]

        amit, prateek = assignee_performance(enquiries)

        assert amit.name == "Amit"
        assert (amit.total, amit.won, amit.loss) == (4, 2, 1)
        assert amit.conversion_rate == 66.7
        assert prateek.total == 0
        assert prateek.conversion_rate == 0.0

    def test_monthly_trend_last_six_months(self):
        enquiries = [
            make_enquiry(date=date(2026, 10, 2), status=EnquiryStatus.WON),
            make_enquiry(date=date(2026, 10, 15)),
            make_enquiry(date=date(2026, 5, 31), status=EnquiryStatus.LOSS),
            make_enquiry(date=date(2026, 4, 30)),
        ]

        trend = monthly_trend(enquiries, NOW)

        assert [m.month for m in trend] == ["May 2026", "Jun 2026", "Jul 2026", "Aug 2026", "Sep 2026", "Oct 2026"]
        assert (trend[-1].total, trend[-1].won) == (2, 1)
        assert (trend[0].total, trend[0].loss) == (1, 1)
        assert sum(m.total for m in trend) == 3

    def test_report_scopes_everything_but_the_trend(self):
        recent = make_enquiry(date=days_ago(3), status=EnquiryStatus.WON)
        older = make_enquiry(date=days_ago(60))

        report = analytics_report([recent, older], Timeframe.MONTH, NOW)

        assert report.timeframe == Timeframe.MONTH
        assert report.total_enquiries == 1
        assert by_label(report.status_breakdown)["Won"].percentage == 100.0
        assert sum(m.total for m in report.monthly_trend) == 2
