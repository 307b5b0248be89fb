from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health", __name__)

@health_bp.route("/health", methods=["GET"])
def health():
    uploader = current_app.extensions["ipfs_uploader"]
    return jsonify({"status": "ok", "api_key_configured": uploader.configured})
