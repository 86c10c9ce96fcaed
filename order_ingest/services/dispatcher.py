"""
Webhook dispatch: classify a payload, extract its fields and append one row.

Runs after the HTTP response has been sent, so failures can only be logged.
"""
import json
import logging
from typing import Any, Mapping, Optional, Union

from order_ingest.config import settings
from order_ingest.integrations.sink import RecordSink
from order_ingest.schemas.records import OrderMasterRecord, PaymentStatusRecord
from order_ingest.services.classifier import EventKind, classify, is_set

logger = logging.getLogger(__name__)

Record = Union[OrderMasterRecord, PaymentStatusRecord]


def date_only(value: Any) -> str:
    """YYYY-MM-DD prefix of an ISO-8601 timestamp, "" when there is none"""
    if not value or not isinstance(value, str):
        return ""
    return value[:10]


def pick_product(payload: Mapping[str, Any]) -> str:
    """
    Product name for the master sheet.

    Created/updated payloads list order lines; other variants only expose a
    final_variants mapping keyed by product name.
    """
    orderlines = payload.get("orderlines")
    if isinstance(orderlines, list) and orderlines and isinstance(orderlines[0], Mapping):
        name = orderlines[0].get("product_name")
        if is_set(name):
            return str(name)

    final_variants = payload.get("final_variants")
    if isinstance(final_variants, Mapping) and final_variants:
        return str(next(iter(final_variants)))
    return ""


def _cell(value: Any) -> Any:
    """Coerce a payload value into something a sheet cell can hold"""
    if value is None:
        return ""
    if isinstance(value, (str, int, float, bool)):
        return value
    return json.dumps(value, default=str)


def _text(payload: Mapping[str, Any], key: str) -> Any:
    value = payload.get(key)
    return _cell(value) if is_set(value) else ""


def _lower(value: Any) -> str:
    return str(value).lower() if is_set(value) else ""


def build_order_master(payload: Mapping[str, Any], kind: EventKind) -> OrderMasterRecord:
    status = _lower(payload.get("status"))
    return OrderMasterRecord(
        order_id=_text(payload, "order_id"),
        created_at=_text(payload, "created_at"),
        created_date=date_only(payload.get("created_at")),
        product=pick_product(payload),
        gross_revenue=_cell(payload.get("gross_revenue")),
        status=status,
        is_spam=payload.get("is_probably_spam") is True or is_set(payload.get("mark_as_spam_by")),
        is_canceled=status == "canceled",
        is_deleted=kind == EventKind.ORDER_DELETED,
        last_updated_at=_text(payload, "last_updated_at"),
    )


def build_payment_status(payload: Mapping[str, Any]) -> PaymentStatusRecord:
    return PaymentStatusRecord(
        order_id=_text(payload, "order_id"),
        paid_time=_text(payload, "paid_time"),
        paid_date=date_only(payload.get("paid_time")),
        payment_status=_lower(payload.get("payment_status")),
        last_updated_at=_text(payload, "last_updated_at"),
    )


def build_record(payload: Mapping[str, Any], kind: Optional[EventKind] = None) -> tuple[str, Record]:
    """Pick the destination sheet and build its row. Exactly one sheet per payload."""
    if kind is None:
        kind = classify(payload)
    if kind == EventKind.ORDER_PAYMENT_STATUS_CHANGED:
        return settings.payments_status_sheet, build_payment_status(payload)
    # Deleted payloads are still recorded, flagged is_deleted
    return settings.orders_master_sheet, build_order_master(payload, kind)


def dispatch(payload: Mapping[str, Any], sink: RecordSink, request_id: Optional[str] = None) -> None:
    """
    Append the row for one webhook payload. Best-effort: never raises.

    Meant to run as a background task once the caller has its 200.
    """
    log_extra = {"request_id": request_id}
    kind = EventKind.UNKNOWN
    table_name = None
    try:
        kind = classify(payload)
        table_name, record = build_record(payload, kind)
        sink.append(table_name, record.as_row())
        logger.info("Recorded %s event in %s", kind.value, table_name, extra=log_extra)
    except Exception:
        logger.exception(
            "Failed to record %s event in %s", kind.value, table_name, extra=log_extra
        )
