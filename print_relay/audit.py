import json, time, os
import logging

from print_relay import env

logger = logging.getLogger(__name__)


def audit(event: str, payload: dict):
    path = env.AUDIT_LOG_PATH
    if not path:
        return
    record = {
        "ts": time.time(),
        "service": env.APP_NAME,
        "event": event,
        "payload": payload,
    }
    # a lost audit line must never change the answer given to the caller
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError as e:
        logger.warning("Could not write audit event %s to %s: %s", event, path, e)
