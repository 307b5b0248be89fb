import logging
import uuid
import time
from flask import g, request

logger = logging.getLogger("ipfs_relay.request")

def start_request():
    g.request_id = uuid.uuid4().hex[:12]
    g.start_time = time.time()

def end_request(response):
    duration_ms = int((time.time() - g.get("start_time", time.time())) * 1000)
    request_id = g.get("request_id", "unknown")

    log = {
        "request_id": request_id,
        "method": request.method,
        "path": request.path,
        "status": response.status_code,
        "duration_ms": duration_ms,
        "content_length": request.content_length
    }

    logger.info("[REQUEST] %s", log)
    response.headers["X-Request-ID"] = request_id
    return response
