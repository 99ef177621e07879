# Trident Contact
# Contact-form inquiries for the spices, travel and business formation divisions

import sys
import os

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from typing import get_args

from flask import Blueprint, Flask, current_app, request, jsonify
from pydantic import ValidationError

from trident import (
    BusinessType,
    InquiryCreate,
    InquiryStatusUpdate,
    InquiryStore,
    configure_logging
)

logger = logging.getLogger(__name__)

bp = Blueprint('contact', __name__)

BUSINESS_TYPES = get_args(BusinessType)


def create_app(store=None):
    """Build the Flask app with its own inquiry store"""
    configure_logging()
    app = Flask(__name__)
    app.extensions['inquiry_store'] = store if store is not None else InquiryStore()
    app.register_blueprint(bp)
    return app


def _store():
    return current_app.extensions['inquiry_store']


def _error(error, message, status):
    return jsonify({'error': error, 'message': message}), status


@bp.route('/api/inquiries', methods=['POST'])
def create_inquiry():
    """Submit a contact inquiry.

    Accepts:
        - name, email, phone (optional)
        - businessType: spices, travel or business_formation
        - subject, message

    Returns:
        - The stored inquiry with status 'new'
    """
    try:
        payload = InquiryCreate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        logger.warning("Rejected inquiry: %s", e.errors(include_url=False, include_input=False))
        return _error('invalid_inquiry', 'Invalid inquiry data', 400)

    try:
        inquiry = _store().create_inquiry(payload)
        return jsonify(inquiry.to_dict())
    except Exception:
        logger.exception("Error creating inquiry")
        return _error('internal_error', 'Failed to create inquiry', 500)


@bp.route('/api/inquiries', methods=['GET'])
def list_inquiries():
    """All inquiries newest first, optionally filtered by ?businessType="""
    business_type = request.args.get('businessType')

    if business_type and business_type not in BUSINESS_TYPES:
        return _error('invalid_business_type', f"Unknown business type '{business_type}'", 400)

    try:
        if business_type:
            inquiries = _store().get_inquiries_by_business_type(business_type)
        else:
            inquiries = _store().get_all_inquiries()
        return jsonify([i.to_dict() for i in inquiries])
    except Exception:
        logger.exception("Error fetching inquiries")
        return _error('internal_error', 'Failed to fetch inquiries', 500)


@bp.route('/api/inquiries/<int:inquiry_id>/status', methods=['PATCH'])
def update_inquiry_status(inquiry_id):
    """Move an inquiry to new, contacted or closed"""
    try:
        payload = InquiryStatusUpdate.model_validate(request.get_json(silent=True) or {})
    except ValidationError:
        return _error('invalid_request', 'status must be new, contacted or closed', 400)

    try:
        inquiry = _store().update_inquiry_status(inquiry_id, payload.status)
        if inquiry is None:
            return _error('inquiry_not_found', 'Inquiry not found', 404)

        return jsonify(inquiry.to_dict())
    except Exception:
        logger.exception("Error updating inquiry status")
        return _error('internal_error', 'Failed to update inquiry status', 500)


@bp.app_errorhandler(404)
def not_found(e):
    return _error('not_found', 'Resource not found', 404)


@bp.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Trident Contact',
        'version': '1.0'
    })


app = create_app()


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
