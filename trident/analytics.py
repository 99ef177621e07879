# Trident Analytics
# Dashboard aggregates computed by scanning all feedback on each request

from datetime import datetime, timedelta

from .config import SENTIMENTS


def _empty_counts():
    return {sentiment: 0 for sentiment in SENTIMENTS}


def _local_date(value):
    """Calendar date of an aware datetime in the server's local timezone"""
    return value.astimezone().date()


def sentiment_stats(records):
    """Counts per sentiment plus total, across all feedback."""
    counts = _empty_counts()
    for record in records:
        counts[record.sentiment] += 1
    counts['total'] = sum(counts.values())
    return counts


def sentiment_trends(records, days, today=None):
    """Per-day sentiment counts for the last `days` local calendar days.

    Always returns exactly `days` entries, oldest first and ending today.
    Days without feedback are zero-filled.

    Args:
        records: Feedback records to bucket
        days: Number of days in the series (must be positive)
        today: Local date the series ends on (default: today)

    Returns:
        List of {'date': 'YYYY-MM-DD', 'positive': n, 'negative': n, 'neutral': n}
    """
    if today is None:
        today = datetime.now().astimezone().date()

    first_day = today - timedelta(days=days - 1)
    buckets = {first_day + timedelta(days=i): _empty_counts() for i in range(days)}

    for record in records:
        bucket = buckets.get(_local_date(record.created_at))
        if bucket is not None:
            bucket[record.sentiment] += 1

    return [
        {'date': day.isoformat(), **counts}
        for day, counts in buckets.items()
    ]


def response_stats(records):
    """Response rate (percent) and mean hours from submission to response.

    Both are 0 when there is nothing to measure.
    """
    records = list(records)
    total = len(records)
    responded = [r for r in records if r.is_responded]

    response_rate = (len(responded) / total) * 100 if total else 0

    response_hours = [
        (r.responded_at - r.created_at).total_seconds() / 3600
        for r in responded
        if r.responded_at is not None
    ]
    avg_response_time = round(sum(response_hours) / len(response_hours), 1) if response_hours else 0

    return {
        'responseRate': response_rate,
        'avgResponseTime': avg_response_time,
    }
