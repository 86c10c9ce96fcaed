"""
Order webhook receiver.

Receive-fast pattern: parse leniently, return 200, append the row in a
background task. The platform retries on any non-2xx, so this endpoint never
reports failures to it.
"""
import json
import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from order_ingest.config import settings
from order_ingest.integrations.sheets import SheetsSink
from order_ingest.integrations.sink import RecordSink
from order_ingest.schemas.webhooks import WebhookAck
from order_ingest.services.dispatcher import dispatch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["Webhooks"])


def get_sink() -> RecordSink:
    return SheetsSink(settings)


async def read_payload(request: Request) -> dict[str, Any]:
    """JSON object body, or {} for anything else (empty, malformed, non-object)"""
    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except ValueError:
        logger.warning("Webhook body is not valid JSON; treating as empty payload")
        return {}
    if not isinstance(payload, dict):
        logger.warning("Webhook body is %s, not an object; treating as empty payload", type(payload).__name__)
        return {}
    return payload


@router.post("/{provider}", response_model=WebhookAck)
async def receive_webhook(
    provider: str,
    request: Request,
    background_tasks: BackgroundTasks,
    sink: RecordSink = Depends(get_sink),
):
    """
    Receive an order webhook.
    Always acknowledges; the sheet append runs after the response is sent.
    """
    request_id = getattr(request.state, "request_id", None)
    log_extra = {"request_id": request_id, "provider": provider}
    try:
        payload = await read_payload(request)
        logger.info(
            "Webhook from %s with %d fields", provider, len(payload), extra=log_extra
        )
        background_tasks.add_task(dispatch, payload, sink, request_id)
    except Exception:
        logger.exception("Failed to accept webhook from %s", provider, extra=log_extra)
    return WebhookAck()
