from flask import Blueprint, jsonify
from ipfs_relay.observability.metrics import snapshot

metrics_bp = Blueprint("metrics", __name__)

@metrics_bp.route("/metrics", methods=["GET"])
def relay_metrics():
    """
    Upload counters since process start: requests seen, files received
    from clients, files pinned upstream, rejected requests and pinning
    API errors. Counters are per process and reset on restart.
    """
    response = jsonify(snapshot())
    response.headers["Cache-Control"] = "no-store"
    return response
