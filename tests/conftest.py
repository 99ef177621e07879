from datetime import datetime, time, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from trident import FeedbackStore, InquiryStore, SentimentClassifier, SentimentResult


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_claude_response(text):
    """Create a mock Anthropic Messages response with a single text block."""
    block = MagicMock()
    block.text = text
    response = MagicMock()
    response.content = [block]
    return response


def local_noon(days_ago=0):
    """Aware datetime at local noon, `days_ago` calendar days before today."""
    day = datetime.now().astimezone().date() - timedelta(days=days_ago)
    return datetime.combine(day, time(12, 0)).astimezone()


class FakeClock:
    """Manually advanced clock for the stores."""

    def __init__(self, start=None):
        self.now = start or datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FakeClassifier(SentimentClassifier):
    """Returns a fixed result and remembers what it was asked."""

    def __init__(self, result=None):
        self.result = result or SentimentResult('positive', 0.9, 5)
        self.calls = []

    def classify(self, text):
        self.calls.append(text)
        return self.result


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def feedback_store(clock):
    return FeedbackStore(clock=clock)


@pytest.fixture
def inquiry_store(clock):
    return InquiryStore(clock=clock)


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def feedback_app(feedback_store, classifier):
    from feedback.app import create_app
    app = create_app(store=feedback_store, classifier=classifier)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def feedback_client(feedback_app):
    return feedback_app.test_client()


@pytest.fixture
def contact_client(inquiry_store):
    from contact.app import create_app
    app = create_app(store=inquiry_store)
    app.config['TESTING'] = True
    return app.test_client()


@pytest.fixture
def valid_feedback():
    return {
        'content': 'This service was absolutely wonderful, thank you!',
        'customerName': 'Amira Haddad',
        'customerEmail': 'amira@example.com',
        'source': 'form',
    }
