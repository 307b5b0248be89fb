import threading

METRICS = {
    "upload_requests": 0,
    "files_received": 0,
    "files_uploaded": 0,
    "upload_failures": 0,
    "upstream_errors": 0,
}

_lock = threading.Lock()

def inc(key, value=1):
    with _lock:
        METRICS[key] = METRICS.get(key, 0) + value

def snapshot():
    with _lock:
        return dict(METRICS)

def reset():
    with _lock:
        for key in METRICS:
            METRICS[key] = 0
