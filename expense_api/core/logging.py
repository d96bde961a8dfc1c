import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
client_ip_ctx: ContextVar[str | None] = ContextVar("client_ip", default=None)

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _request_context() -> dict[str, str]:
    context = {}
    request_id = request_id_ctx.get()
    client_ip = client_ip_ctx.get()
    if request_id:
        context["request_id"] = request_id
    if client_ip:
        context["client_ip"] = client_ip
    return context


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_request_context(),
        }
        event = getattr(record, "event", None)
        if event is not None:
            payload["event"] = event
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # audit events carry Decimal amounts
        return json.dumps(payload, ensure_ascii=True, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local development; appends the request id."""

    def __init__(self) -> None:
        super().__init__(fmt=TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        event = getattr(record, "event", None)
        if event is not None:
            line = f"{line} {json.dumps(event, default=str)}"
        request_id = request_id_ctx.get()
        if request_id:
            line = f"{line} [request_id={request_id}]"
        return line


def configure_logging(level: str, fmt: str = "json") -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(TextFormatter() if fmt.lower() == "text" else JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
    # the access middleware already logs every request
    logging.getLogger("uvicorn.access").disabled = True
