"""
Tests for dashboard aggregates: sentiment counts, daily trends, response stats.
"""

from datetime import datetime, timedelta, timezone

import pytest

from trident import FeedbackCreate, FeedbackStore, response_stats, sentiment_stats, sentiment_trends

from conftest import FakeClock, local_noon


def _add(store, sentiment):
    payload = FeedbackCreate(
        content='Some feedback text here.',
        customer_name='Layla',
        source='chat',
    )
    return store.create_feedback(payload, sentiment, 0.8)


class TestSentimentStats:

    def test_empty(self):
        assert sentiment_stats([]) == {'positive': 0, 'negative': 0, 'neutral': 0, 'total': 0}

    def test_counts(self, feedback_store):
        for sentiment in ['positive', 'positive', 'negative', 'neutral', 'positive']:
            _add(feedback_store, sentiment)

        stats = sentiment_stats(feedback_store.get_all_feedback())

        assert stats == {'positive': 3, 'negative': 1, 'neutral': 1, 'total': 5}


class TestSentimentTrends:

    @pytest.fixture
    def local_clock(self):
        return FakeClock(start=local_noon(0))

    @pytest.fixture
    def store(self, local_clock):
        return FeedbackStore(clock=local_clock)

    @pytest.mark.parametrize('days', [1, 7, 30])
    def test_series_is_gapless_and_ascending(self, days):
        today = datetime.now().astimezone().date()

        trends = sentiment_trends([], days, today=today)

        assert len(trends) == days
        assert trends[-1]['date'] == today.isoformat()
        assert trends[0]['date'] == (today - timedelta(days=days - 1)).isoformat()
        assert [t['date'] for t in trends] == sorted(t['date'] for t in trends)
        assert all(t['positive'] == t['negative'] == t['neutral'] == 0 for t in trends)

    def test_buckets_by_local_day(self, store, local_clock):
        today = local_noon(0).date()

        local_clock.now = local_noon(0)
        _add(store, 'positive')
        _add(store, 'negative')
        local_clock.now = local_noon(2)
        _add(store, 'neutral')
        local_clock.now = local_noon(10)
        _add(store, 'positive')

        trends = sentiment_trends(store.get_all_feedback(), 7, today=today)
        by_date = {t['date']: t for t in trends}

        assert by_date[today.isoformat()] == {'date': today.isoformat(), 'positive': 1, 'negative': 1, 'neutral': 0}
        two_days_ago = (today - timedelta(days=2)).isoformat()
        assert by_date[two_days_ago]['neutral'] == 1

        # the 10-day-old record is outside the window
        total = sum(t['positive'] + t['negative'] + t['neutral'] for t in trends)
        assert total == 3

    def test_window_total_matches_feedback_in_window(self, store, local_clock):
        today = local_noon(0).date()
        for days_ago, sentiment in enumerate(['positive', 'negative', 'neutral'] * 4):
            local_clock.now = local_noon(days_ago)
            _add(store, sentiment)

        trends = sentiment_trends(store.get_all_feedback(), 5, today=today)

        total = sum(t['positive'] + t['negative'] + t['neutral'] for t in trends)
        assert total == 5

    def test_day_boundaries(self, store, local_clock):
        today = local_noon(0).date()
        midnight = datetime.combine(today, datetime.min.time()).astimezone()

        local_clock.now = midnight
        _add(store, 'positive')
        local_clock.now = midnight - timedelta(microseconds=1)
        _add(store, 'negative')

        trends = sentiment_trends(store.get_all_feedback(), 2, today=today)

        assert trends[1]['positive'] == 1 and trends[1]['negative'] == 0
        assert trends[0]['negative'] == 1 and trends[0]['positive'] == 0


class TestResponseStats:

    def test_empty_has_no_division_by_zero(self):
        assert response_stats([]) == {'responseRate': 0, 'avgResponseTime': 0}

    def test_all_responded_is_100(self, feedback_store):
        for _ in range(3):
            record = _add(feedback_store, 'positive')
            feedback_store.update_feedback_response(record.id, True)

        assert response_stats(feedback_store.get_all_feedback())['responseRate'] == 100

    def test_partial_rate(self, feedback_store):
        records = [_add(feedback_store, 'neutral') for _ in range(4)]
        feedback_store.update_feedback_response(records[0].id, True)

        assert response_stats(feedback_store.get_all_feedback())['responseRate'] == 25

    def test_average_response_time_in_hours(self):
        clock = FakeClock(start=datetime(2025, 5, 1, 8, 0, tzinfo=timezone.utc))
        store = FeedbackStore(clock=clock)
        first = _add(store, 'negative')
        second = _add(store, 'positive')
        _add(store, 'neutral')

        clock.advance(hours=2)
        store.update_feedback_response(first.id, True)
        clock.advance(hours=4)
        store.update_feedback_response(second.id, True)

        stats = response_stats(store.get_all_feedback())

        assert stats['avgResponseTime'] == 4.0
        assert stats['responseRate'] == pytest.approx(66.6667, rel=1e-4)
