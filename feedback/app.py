# Trident Feedback
# Customer feedback collection, sentiment analysis and dashboard analytics
#
# Feedback is classified by Claude on submission. Classification is
# best-effort: if Claude is unreachable or returns junk, the feedback is
# still stored with a low-confidence neutral sentiment.

import sys
import os

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from flask import Blueprint, Flask, Response, current_app, request, jsonify
from anthropic import Anthropic
import httpx
from pydantic import ValidationError

from trident import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_MODEL,
    SENTIMENT_TIMEOUT_SECONDS,
    SENTIMENT_MAX_TOKENS,
    TRENDS_DEFAULT_DAYS,
    TRENDS_MAX_DAYS,
    FeedbackCreate,
    FeedbackRespond,
    FeedbackStore,
    ClaudeSentimentClassifier,
    parse_positive_int,
    configure_logging,
    sentiment_stats,
    sentiment_trends,
    response_stats,
    feedback_to_csv
)

logger = logging.getLogger(__name__)

# Load prompt
PROMPT_PATH = os.path.join(os.path.dirname(__file__), 'prompt.txt')
with open(PROMPT_PATH, 'r') as f:
    SENTIMENT_PROMPT = f.read()

bp = Blueprint('feedback', __name__)


def build_classifier():
    """Claude-backed classifier. Falls back to neutral results if no API key is set."""
    anthropic_client = None
    if ANTHROPIC_API_KEY:
        anthropic_client = Anthropic(
            api_key=ANTHROPIC_API_KEY,
            max_retries=0,
            http_client=httpx.Client(timeout=SENTIMENT_TIMEOUT_SECONDS, follow_redirects=True)
        )
    else:
        logger.warning("No Anthropic API key configured, feedback will not be classified")

    return ClaudeSentimentClassifier(
        client=anthropic_client,
        prompt=SENTIMENT_PROMPT,
        model=ANTHROPIC_MODEL,
        max_tokens=SENTIMENT_MAX_TOKENS
    )


def create_app(store=None, classifier=None):
    """Build the Flask app with its own store and classifier.

    Both can be injected (tests); by default a fresh in-memory store and the
    Claude classifier are used.
    """
    configure_logging()
    app = Flask(__name__)
    app.extensions['feedback_store'] = store if store is not None else FeedbackStore()
    app.extensions['sentiment_classifier'] = classifier if classifier is not None else build_classifier()
    app.register_blueprint(bp)
    return app


def _store():
    return current_app.extensions['feedback_store']


def _classifier():
    return current_app.extensions['sentiment_classifier']


def _error(error, message, status):
    return jsonify({'error': error, 'message': message}), status


# ===================
# FEEDBACK
# ===================

@bp.route('/api/feedback', methods=['POST'])
def create_feedback():
    """Submit and classify a piece of feedback.

    Accepts:
        - content: Feedback text (10+ characters)
        - customerName: Who left it
        - customerEmail: Optional, used to group feedback per customer
        - source: form, email, sms, phone, chat or review

    Returns:
        - The stored feedback record with sentiment, confidence and rating
    """
    try:
        payload = FeedbackCreate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        logger.warning("Rejected feedback submission: %s", e.errors(include_url=False, include_input=False))
        return _error('invalid_feedback', 'Invalid feedback data', 400)

    try:
        store = _store()
        result = _classifier().classify(payload.content)

        feedback = store.create_feedback(
            payload,
            sentiment=result.sentiment,
            confidence=result.confidence,
            rating=result.rating
        )

        # Create or update customer
        if payload.customer_email:
            store.get_or_create_customer(payload.customer_name, payload.customer_email)
            store.update_customer_stats(payload.customer_email)

        return jsonify(feedback.to_dict())

    except Exception:
        logger.exception("Error creating feedback")
        return _error('internal_error', 'Failed to create feedback', 500)


@bp.route('/api/feedback', methods=['GET'])
def list_feedback():
    """All feedback, newest first"""
    try:
        return jsonify([f.to_dict() for f in _store().get_all_feedback()])
    except Exception:
        logger.exception("Error fetching feedback")
        return _error('internal_error', 'Failed to fetch feedback', 500)


@bp.route('/api/feedback/<int:feedback_id>/respond', methods=['PATCH'])
def respond_to_feedback(feedback_id):
    """Mark feedback as responded (or not).

    Accepts:
        - isResponded: Boolean
    """
    try:
        payload = FeedbackRespond.model_validate(request.get_json(silent=True) or {})
    except ValidationError:
        return _error('invalid_request', 'isResponded must be true or false', 400)

    try:
        feedback = _store().update_feedback_response(feedback_id, payload.is_responded)
        if feedback is None:
            return _error('feedback_not_found', 'Feedback not found', 404)

        return jsonify(feedback.to_dict())

    except Exception:
        logger.exception("Error updating feedback response")
        return _error('internal_error', 'Failed to update feedback response', 500)


@bp.route('/api/customers', methods=['GET'])
def list_customers():
    """Customers with their feedback counts, newest first"""
    try:
        return jsonify([c.to_dict() for c in _store().get_all_customers()])
    except Exception:
        logger.exception("Error fetching customers")
        return _error('internal_error', 'Failed to fetch customers', 500)


# ===================
# ANALYTICS
# ===================

@bp.route('/api/analytics/sentiment-stats', methods=['GET'])
def get_sentiment_stats():
    try:
        return jsonify(sentiment_stats(_store().get_all_feedback()))
    except Exception:
        logger.exception("Error fetching sentiment stats")
        return _error('internal_error', 'Failed to fetch sentiment stats', 500)


@bp.route('/api/analytics/sentiment-trends', methods=['GET'])
def get_sentiment_trends():
    """Daily sentiment counts for the last `days` days (default 30).

    Rejects `days` above TRENDS_MAX_DAYS rather than returning a shorter series.
    """
    days = parse_positive_int(request.args.get('days'), TRENDS_DEFAULT_DAYS)
    if days > TRENDS_MAX_DAYS:
        return _error('invalid_days', f"days must be at most {TRENDS_MAX_DAYS}", 400)

    try:
        return jsonify(sentiment_trends(_store().get_all_feedback(), days))
    except Exception:
        logger.exception("Error fetching sentiment trends")
        return _error('internal_error', 'Failed to fetch sentiment trends', 500)


@bp.route('/api/analytics/response-stats', methods=['GET'])
def get_response_stats():
    try:
        return jsonify(response_stats(_store().get_all_feedback()))
    except Exception:
        logger.exception("Error fetching response stats")
        return _error('internal_error', 'Failed to fetch response stats', 500)


# ===================
# EXPORT
# ===================

@bp.route('/api/export/feedback', methods=['GET'])
def export_feedback():
    """Download all feedback as CSV"""
    try:
        csv_text = feedback_to_csv(_store().get_all_feedback())
        return Response(
            csv_text,
            mimetype='text/csv',
            headers={'Content-Disposition': 'attachment; filename="feedback-export.csv"'}
        )
    except Exception:
        logger.exception("Error exporting feedback")
        return _error('internal_error', 'Failed to export feedback', 500)


@bp.app_errorhandler(404)
def not_found(e):
    return _error('not_found', 'Resource not found', 404)


@bp.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Trident Feedback',
        'version': '1.0'
    })


app = create_app()


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
