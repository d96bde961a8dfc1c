import logging
from typing import Any


logger = logging.getLogger("audit")


def audit_log(event: str, user_id: str | None, ip: str | None, **details: Any) -> None:
    payload = {
        "event": event,
        "user_id": user_id,
        "ip": ip,
        "details": {key: value for key, value in details.items() if value is not None},
    }
    logger.info("audit", extra={"event": payload})
