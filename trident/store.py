# Trident Shared Store
# In-memory feedback, customer and inquiry storage
#
# State lives for the lifetime of the process. Each store is created once by
# its service's app factory and guards its maps with a single lock.

import logging
import threading

from .helpers import utc_now
from .schemas import CustomerRecord, FeedbackRecord, InquiryRecord

logger = logging.getLogger(__name__)


def _newest_first(records):
    return sorted(records, key=lambda r: (r.created_at, r.id), reverse=True)


class FeedbackStore:
    """Owns the feedback and customer maps.

    clock is a zero-argument callable returning an aware datetime; tests
    pass their own to control timestamps.
    """

    def __init__(self, clock=utc_now):
        self._clock = clock
        self._lock = threading.RLock()
        self._feedback = {}
        self._customers = {}
        self._next_feedback_id = 1
        self._next_customer_id = 1

    # ===================
    # FEEDBACK
    # ===================

    def create_feedback(self, payload, sentiment, confidence, rating=None):
        """Store a validated FeedbackCreate together with its classification."""
        with self._lock:
            record = FeedbackRecord(
                id=self._next_feedback_id,
                content=payload.content,
                customer_name=payload.customer_name,
                customer_email=payload.customer_email,
                source=payload.source,
                sentiment=sentiment,
                confidence=confidence,
                rating=rating,
                is_responded=False,
                created_at=self._clock(),
            )
            self._feedback[record.id] = record
            self._next_feedback_id += 1

        logger.info("Created feedback %s (%s)", record.id, record.sentiment)
        return record

    def get_feedback(self, feedback_id):
        with self._lock:
            return self._feedback.get(feedback_id)

    def get_all_feedback(self):
        """All feedback, most recent first."""
        with self._lock:
            return _newest_first(self._feedback.values())

    def update_feedback_response(self, feedback_id, is_responded):
        """Set the responded flag. Returns None if the id does not exist."""
        with self._lock:
            record = self._feedback.get(feedback_id)
            if record is None:
                return None

            if is_responded and not record.is_responded:
                record.responded_at = self._clock()
            elif not is_responded:
                record.responded_at = None
            record.is_responded = is_responded

        logger.info("Feedback %s responded=%s", feedback_id, is_responded)
        return record

    def get_feedback_by_date_range(self, start, end):
        """Feedback created within [start, end], most recent first."""
        with self._lock:
            return _newest_first(
                r for r in self._feedback.values() if start <= r.created_at <= end
            )

    # ===================
    # CUSTOMERS
    # ===================

    def create_customer(self, name, email):
        with self._lock:
            customer = CustomerRecord(
                id=self._next_customer_id,
                name=name,
                email=email,
                total_feedback=0,
                last_feedback_at=None,
                created_at=self._clock(),
            )
            self._customers[customer.id] = customer
            self._next_customer_id += 1

        logger.info("Created customer %s <%s>", customer.id, email)
        return customer

    def get_customer_by_email(self, email):
        with self._lock:
            for customer in self._customers.values():
                if customer.email == email:
                    return customer
            return None

    def get_or_create_customer(self, name, email):
        """Find the customer for email, creating it if missing, atomically."""
        with self._lock:
            customer = self.get_customer_by_email(email)
            if customer is None:
                customer = self.create_customer(name, email)
            return customer

    def get_all_customers(self):
        with self._lock:
            return _newest_first(self._customers.values())

    def update_customer_stats(self, email):
        """Recount feedback for email and stamp lastFeedbackAt.

        Full scan of all feedback on every call.
        """
        with self._lock:
            customer = self.get_customer_by_email(email)
            if customer is None:
                return None

            customer.total_feedback = sum(
                1 for r in self._feedback.values() if r.customer_email == email
            )
            customer.last_feedback_at = self._clock()
            return customer


class InquiryStore:
    """Owns the contact-inquiry map."""

    def __init__(self, clock=utc_now):
        self._clock = clock
        self._lock = threading.RLock()
        self._inquiries = {}
        self._next_inquiry_id = 1

    def create_inquiry(self, payload):
        """Store a validated InquiryCreate with status 'new'."""
        with self._lock:
            inquiry = InquiryRecord(
                id=self._next_inquiry_id,
                name=payload.name,
                email=payload.email,
                phone=payload.phone,
                business_type=payload.business_type,
                subject=payload.subject,
                message=payload.message,
                status='new',
                created_at=self._clock(),
            )
            self._inquiries[inquiry.id] = inquiry
            self._next_inquiry_id += 1

        logger.info("Created %s inquiry %s", inquiry.business_type, inquiry.id)
        return inquiry

    def get_all_inquiries(self):
        with self._lock:
            return _newest_first(self._inquiries.values())

    def get_inquiries_by_business_type(self, business_type):
        with self._lock:
            return _newest_first(
                i for i in self._inquiries.values() if i.business_type == business_type
            )

    def update_inquiry_status(self, inquiry_id, status):
        """Returns None if the id does not exist."""
        with self._lock:
            inquiry = self._inquiries.get(inquiry_id)
            if inquiry is None:
                return None
            inquiry.status = status

        logger.info("Inquiry %s status=%s", inquiry_id, status)
        return inquiry
