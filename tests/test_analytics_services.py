"""
Tests for the analytics aggregation core.

These run against in-memory stand-ins only; no database access.
"""

from datetime import date, datetime, timezone as dt_timezone

import pytest

from apps.analytics.services import (
    Breakdown, MonthlyStats, WorkloadSnapshot,
    compute_month_detail, compute_monthly_stats, compute_request_type_stats,
    compute_requester_stats, compute_workload_snapshot, format_duration,
    month_key, resolve_task_type_name,
)
from tests.factories import make_request, make_task_type, tokyo


# =============================================================================
# Month keys
# =============================================================================

class TestMonthKey:

    def test_aware_datetime_uses_local_time(self):
        # 2024-03-31 16:00 UTC is 2024-04-01 01:00 in Tokyo
        value = datetime(2024, 3, 31, 16, 0, tzinfo=dt_timezone.utc)
        assert month_key(value) == '2024-04'

    def test_naive_datetime_and_date(self):
        assert month_key(datetime(2024, 3, 15, 9, 0)) == '2024-03'
        assert month_key(date(2023, 12, 1)) == '2023-12'

    def test_missing_value(self):
        assert month_key(None) is None
        assert month_key('2024-03') is None


# =============================================================================
# Monthly stats
# =============================================================================

class TestMonthlyStats:

    def test_single_completed_request(self):
        requests = [
            make_request(status='completed', estimated_minutes=10,
                         updated_at=tokyo(2024, 3, 15)),
            make_request(status='pending', estimated_minutes=25),
        ]

        assert compute_monthly_stats(requests) == [
            MonthlyStats(month='2024-03', completed_count=1, total_minutes=10),
        ]

    def test_sorted_most_recent_first(self):
        requests = [
            make_request(status='completed', updated_at=tokyo(2023, 11, 2)),
            make_request(status='completed', updated_at=tokyo(2024, 2, 2)),
            make_request(status='completed', updated_at=tokyo(2023, 12, 2)),
            make_request(status='completed', updated_at=tokyo(2024, 2, 20)),
        ]

        stats = compute_monthly_stats(requests)

        assert [s.month for s in stats] == ['2024-02', '2023-12', '2023-11']
        assert stats[0].completed_count == 2
        assert stats[0].total_minutes == 20

    def test_completed_at_takes_precedence_over_updated_at(self):
        request = make_request(
            status='completed',
            completed_at=tokyo(2024, 3, 30),
            updated_at=tokyo(2024, 5, 2),
        )

        assert [s.month for s in compute_monthly_stats([request])] == ['2024-03']

    def test_pending_only_produces_nothing(self):
        assert compute_monthly_stats([make_request(status='pending')]) == []

    @pytest.mark.parametrize('requests', [None, [], ()])
    def test_empty_input(self, requests):
        assert compute_monthly_stats(requests) == []

    def test_request_without_timestamps_is_skipped(self):
        request = make_request(status='completed', estimated_minutes=7)
        request.updated_at = None

        assert compute_monthly_stats([request]) == []

    def test_month_totals_never_exceed_completed_total(self):
        undated = make_request(status='completed', estimated_minutes=4)
        undated.updated_at = None
        requests = [
            make_request(status='completed', estimated_minutes=12.5,
                         updated_at=tokyo(2024, 1, 5)),
            make_request(status='completed', estimated_minutes=3,
                         updated_at=tokyo(2024, 2, 5)),
            make_request(status='pending', estimated_minutes=100),
            undated,
        ]

        completed_total = sum(
            r.estimated_minutes for r in requests if r.status == 'completed'
        )
        month_total = sum(s.total_minutes for s in compute_monthly_stats(requests))

        assert month_total <= completed_total
        assert month_total == completed_total - undated.estimated_minutes


# =============================================================================
# Requester stats
# =============================================================================

class TestRequesterStats:

    def test_counts_and_minutes(self):
        requests = [
            make_request('Sato', status='completed', estimated_minutes=10),
            make_request('Sato', status='pending', estimated_minutes=99),
            make_request('Tanaka', status='completed', estimated_minutes=5),
        ]

        sato, tanaka = compute_requester_stats(requests)

        assert sato.requester_name == 'Sato'
        assert sato.total_requests == 2
        assert sato.completed_requests == 1
        assert sato.total_minutes == 10
        assert sato.completion_rate == 50.0
        assert tanaka.total_requests == 1
        assert tanaka.completion_rate == 100.0

    def test_ties_keep_encounter_order(self):
        names = ['Kato', 'Ito', 'Ito', 'Kato', 'Abe']
        requests = [make_request(name) for name in names]

        stats = compute_requester_stats(requests)

        assert [s.requester_name for s in stats] == ['Kato', 'Ito', 'Abe']

    def test_completed_never_exceeds_total(self):
        requests = [
            make_request(name, status=status)
            for name in ('A', 'B', 'C')
            for status in ('pending', 'completed', 'completed')
        ]

        for stats in compute_requester_stats(requests):
            assert stats.completed_requests <= stats.total_requests

    def test_empty_input(self):
        assert compute_requester_stats(None) == []


# =============================================================================
# Request type stats
# =============================================================================

class TestRequestTypeStats:

    def test_count_includes_all_minutes_only_completed(self):
        requests = [
            make_request(task_type_id=1, status='completed', estimated_minutes=10),
            make_request(task_type_id=1, status='pending', estimated_minutes=50),
            make_request(task_type_id=2, status='completed', estimated_minutes=3),
            make_request(task_type_id=1, status='completed', estimated_minutes=2),
        ]

        first, second = compute_request_type_stats(requests)

        assert first.request_type == 1
        assert first.count == 3
        assert first.total_minutes == 12
        assert second.request_type == 2
        assert second.count == 1

    def test_dangling_reference_is_kept(self):
        stats = compute_request_type_stats([make_request(task_type_id=999)])
        assert stats[0].request_type == 999


# =============================================================================
# Workload snapshot
# =============================================================================

class TestWorkloadSnapshot:

    def test_empty_input_is_all_zero(self):
        assert compute_workload_snapshot([]) == WorkloadSnapshot(0, 0, 0)
        assert compute_workload_snapshot(None) == WorkloadSnapshot(0, 0, 0)

    def test_only_pending_requests_count(self):
        requests = [
            make_request(status='pending', estimated_minutes=45),
            make_request(status='pending', estimated_minutes=45),
            make_request(status='completed', estimated_minutes=500),
        ]

        snapshot = compute_workload_snapshot(requests)

        assert snapshot.pending_count == 2
        assert snapshot.total_estimated_minutes == 90
        assert snapshot.total_estimated_hours == 1.5


# =============================================================================
# Month detail
# =============================================================================

class TestMonthDetail:

    def setup_method(self):
        self.task_types = [
            make_task_type(1, 'Hanger inspection'),
            make_task_type(2, 'Pipe inspection'),
        ]

    def test_breakdowns(self):
        requests = [
            make_request('Sato', task_type_id=1, status='completed',
                         estimated_minutes=5, updated_at=tokyo(2024, 3, 1)),
            make_request('Sato', task_type_id=2, status='completed',
                         estimated_minutes=2, updated_at=tokyo(2024, 3, 20)),
            make_request('Ito', task_type_id=1, status='completed',
                         estimated_minutes=1, updated_at=tokyo(2024, 3, 31)),
            make_request('Ito', task_type_id=1, status='completed',
                         estimated_minutes=8, updated_at=tokyo(2024, 4, 1)),
            make_request('Ito', task_type_id=1, status='pending',
                         estimated_minutes=8, updated_at=tokyo(2024, 3, 2)),
        ]

        detail = compute_month_detail(requests, self.task_types, '2024-03')

        assert detail.month == '2024-03'
        assert len(detail.requests) == 3
        assert detail.task_type_breakdown == {
            'Hanger inspection': Breakdown(count=2, total_minutes=6),
            'Pipe inspection': Breakdown(count=1, total_minutes=2),
        }
        assert detail.requester_breakdown == {
            'Sato': Breakdown(count=2, total_minutes=7),
            'Ito': Breakdown(count=1, total_minutes=1),
        }
        assert detail.total_minutes == 8

    def test_unresolved_task_type_uses_unknown_label(self):
        requests = [
            make_request(task_type_id=404, status='completed', estimated_minutes=3,
                         updated_at=tokyo(2024, 3, 10)),
        ]

        detail = compute_month_detail(requests, self.task_types, '2024-03')

        assert detail.task_type_breakdown == {
            'Unknown task type': Breakdown(count=1, total_minutes=3),
        }

    def test_unknown_label_is_configurable(self, settings):
        settings.UNKNOWN_TASK_TYPE_LABEL = 'Retired type'
        requests = [
            make_request(task_type_id=404, status='completed',
                         updated_at=tokyo(2024, 3, 10)),
        ]

        detail = compute_month_detail(requests, [], '2024-03')

        assert list(detail.task_type_breakdown) == ['Retired type']

    def test_no_matching_month(self):
        detail = compute_month_detail(
            [make_request(status='completed')], self.task_types, '1999-01'
        )
        assert detail.requests == []
        assert detail.task_type_breakdown == {}
        assert detail.requester_breakdown == {}

    def test_none_inputs(self):
        detail = compute_month_detail(None, None, '2024-03')
        assert detail.requests == []

    def test_resolve_task_type_name(self):
        by_id = {1: self.task_types[0]}
        assert resolve_task_type_name(1, by_id) == 'Hanger inspection'
        assert resolve_task_type_name(None, by_id) == 'Unknown task type'


# =============================================================================
# Idempotence
# =============================================================================

def test_aggregators_are_idempotent():
    requests = [
        make_request('Sato', task_type_id=1, status='completed', estimated_minutes=4),
        make_request('Ito', task_type_id=2, status='pending', estimated_minutes=6),
    ]
    task_types = [make_task_type(1, 'Hanger inspection')]
    before = [vars(r).copy() for r in requests]

    def run():
        return (
            compute_monthly_stats(requests),
            compute_requester_stats(requests),
            compute_request_type_stats(requests),
            compute_workload_snapshot(requests),
            compute_month_detail(requests, task_types, '2024-03'),
        )

    assert run() == run()
    assert [vars(r) for r in requests] == before


# =============================================================================
# Duration formatting
# =============================================================================

@pytest.mark.parametrize('minutes, expected', [
    (0, '0m'),
    (45, '45m'),
    (60, '1h'),
    (90, '1h30m'),
    (150, '2h30m'),
    (30.5, '31m'),
    (119.6, '1h'),
    (59.4, '59m'),
    (59.6, '0m'),
    (-5, '0m'),
    (None, '0m'),
    ('abc', '0m'),
    (float('nan'), '0m'),
    (float('inf'), '0m'),
])
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected
