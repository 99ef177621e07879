# Trident Shared Schemas
# Request validation and record shapes for all Trident services
#
# Fields are snake_case in Python and camelCase on the wire.

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, field_serializer
from pydantic.alias_generators import to_camel

from .helpers import to_iso_utc

FeedbackSource = Literal['form', 'email', 'sms', 'phone', 'chat', 'review']
Sentiment = Literal['positive', 'negative', 'neutral']
BusinessType = Literal['spices', 'travel', 'business_formation']
InquiryStatus = Literal['new', 'contacted', 'closed']


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self):
        """JSON-ready dict with camelCase keys"""
        return self.model_dump(by_alias=True, mode='json')


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _not_blank(value):
    if not value.strip():
        raise ValueError('must not be blank')
    return value


# Empty form fields arrive as '' and mean "not given"
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]

# Required short text; rejected if only whitespace, stored as sent
NonBlankText = Annotated[str, AfterValidator(_not_blank)]


# ===================
# REQUEST BODIES
# ===================

class FeedbackCreate(CamelModel):
    content: str = Field(min_length=10)
    customer_name: NonBlankText
    customer_email: OptionalText = None
    source: FeedbackSource


class FeedbackRespond(CamelModel):
    is_responded: StrictBool


class InquiryCreate(CamelModel):
    name: NonBlankText
    email: str = Field(pattern=r'^[^@\s]+@[^@\s]+$')
    phone: OptionalText = None
    business_type: BusinessType
    subject: NonBlankText
    message: NonBlankText


class InquiryStatusUpdate(CamelModel):
    status: InquiryStatus


# ===================
# STORED RECORDS
# ===================

class FeedbackRecord(CamelModel):
    id: int
    content: str
    customer_name: str
    customer_email: Optional[str] = None
    source: FeedbackSource
    sentiment: Sentiment
    confidence: float = Field(ge=0.0, le=1.0)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    is_responded: bool = False
    responded_at: Optional[datetime] = None
    created_at: datetime

    @field_serializer('created_at', 'responded_at')
    def _serialize_timestamp(self, value):
        return to_iso_utc(value) if value is not None else None


class CustomerRecord(CamelModel):
    id: int
    name: str
    email: str
    total_feedback: int = 0
    last_feedback_at: Optional[datetime] = None
    created_at: datetime

    @field_serializer('created_at', 'last_feedback_at')
    def _serialize_timestamp(self, value):
        return to_iso_utc(value) if value is not None else None


class InquiryRecord(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    business_type: BusinessType
    subject: str
    message: str
    status: InquiryStatus = 'new'
    created_at: datetime

    @field_serializer('created_at')
    def _serialize_timestamp(self, value):
        return to_iso_utc(value)
