import json
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from order_ingest.routers import webhooks
from order_ingest.config import settings

# Fields that webhook log calls pass through `extra=`
LOG_CONTEXT_FIELDS = ("request_id", "provider")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, carrying the webhook request context"""

    def format(self, record):
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in LOG_CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def configure_logging(log_level: str, log_format: str) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)
    if log_format == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.root.handlers = [handler]
        logging.root.setLevel(level)
    else:
        logging.basicConfig(level=level)


configure_logging(settings.log_level, settings.log_format)
logger = logging.getLogger("order_ingest")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tags each request with X-Request-ID so background dispatch logs can be traced back"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


app = FastAPI(
    title="Order Webhook Ingest",
    description="Receives order webhooks and appends them to Google Sheets",
    version="1.0.0",
    debug=settings.debug,
)

app.add_middleware(RequestIdMiddleware)

app.include_router(webhooks.router)


# Platform validators hit GET before saving a webhook URL
@app.get("/", response_class=PlainTextResponse)
def root():
    return "OK"


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    logger.info("listening on %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
