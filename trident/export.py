# Trident Export
# CSV rendering of feedback for download

from .helpers import to_iso_utc

CSV_HEADERS = ['ID', 'Customer Name', 'Email', 'Content', 'Sentiment', 'Confidence', 'Rating', 'Source', 'Date', 'Responded']


def _quote(text):
    return '"' + text.replace('"', '""') + '"'


def _format_number(value):
    """0.95 -> '0.95', 1.0 -> '1', full precision otherwise"""
    text = repr(float(value))
    if text.endswith('.0'):
        text = text[:-2]
    return text


def feedback_to_csv(records):
    """Render feedback records as CSV text.

    Column order and quoting are fixed for downstream consumers: only the
    Content column is quoted (with internal quotes doubled), rows are joined
    with '\\n'.
    """
    rows = [CSV_HEADERS]
    for record in records:
        rows.append([
            str(record.id),
            record.customer_name,
            record.customer_email or '',
            _quote(record.content),
            record.sentiment,
            _format_number(record.confidence),
            str(record.rating) if record.rating is not None else '',
            record.source,
            to_iso_utc(record.created_at),
            'Yes' if record.is_responded else 'No',
        ])
    return '\n'.join(','.join(row) for row in rows)
