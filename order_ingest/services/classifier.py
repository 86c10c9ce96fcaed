"""
Event classification for order webhooks.

The platform sends no event-type field, so the kind is inferred from which
keys the payload carries. Rules are checked in priority order and the first
match wins: payment-status payloads also carry order id and timestamps, so
that rule must come first.
"""
import enum
from typing import Any, Callable, Mapping

# Deleted notifications carry only identifying fields
DELETED_MAX_KEYS = 4


class EventKind(str, enum.Enum):
    ORDER_PAYMENT_STATUS_CHANGED = "order.payment_status_changed"
    ORDER_DELETED = "order.deleted"
    ORDER_PAYLOAD = "order.payload"  # created / updated / epayment_created
    ORDER_STATUS_CHANGED = "order.status_changed"
    UNKNOWN = "unknown"


def is_set(value: Any) -> bool:
    """
    Truthiness for decoded JSON: null, false, 0 and "" are unset.

    Empty objects and arrays still count as set; the platform sends them for
    fields like mark_as_spam_by.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and value == value
    if isinstance(value, str):
        return value != ""
    return True


def _looks_like_payment(payload: Mapping[str, Any]) -> bool:
    return (
        "id" in payload
        and payload.get("paid_time") is not None
        and "payment_status" in payload
    )


def _looks_like_deleted(payload: Mapping[str, Any]) -> bool:
    return (
        is_set(payload.get("order_id"))
        and is_set(payload.get("created_at"))
        and is_set(payload.get("last_updated_at"))
        and len(payload) <= DELETED_MAX_KEYS
    )


def _has_gross_revenue(payload: Mapping[str, Any]) -> bool:
    return "gross_revenue" in payload


def _looks_like_status_change(payload: Mapping[str, Any]) -> bool:
    return "status" in payload and "draft_time" in payload


RULES: list[tuple[EventKind, Callable[[Mapping[str, Any]], bool]]] = [
    (EventKind.ORDER_PAYMENT_STATUS_CHANGED, _looks_like_payment),
    (EventKind.ORDER_DELETED, _looks_like_deleted),
    (EventKind.ORDER_PAYLOAD, _has_gross_revenue),
    (EventKind.ORDER_STATUS_CHANGED, _looks_like_status_change),
]


def classify(payload: Any) -> EventKind:
    """Best-effort event kind for a webhook payload. Never raises."""
    if not isinstance(payload, Mapping):
        return EventKind.UNKNOWN
    for kind, matches in RULES:
        if matches(payload):
            return kind
    return EventKind.UNKNOWN
