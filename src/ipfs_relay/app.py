from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge
import logging

from ipfs_relay.config import load_config
from ipfs_relay.observability.request_context import start_request, end_request
from ipfs_relay.routes.health import health_bp
from ipfs_relay.routes.metrics import metrics_bp
from ipfs_relay.routes.upload import upload_bp
from ipfs_relay.services.ipfs import IPFSUploader

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
CORS_HEADERS = ["Origin", "Content-Length", "Content-Type"]
CORS_MAX_AGE = 12 * 60 * 60

def configure_logging(level):
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("ipfs_relay").setLevel(level)

def create_app(overrides=None, session=None):
    """
    Build the relay application.

    `overrides` replaces values loaded from the environment and `session`
    replaces the HTTP session used to reach the pinning API.
    """
    app = Flask(__name__)
    app.config.update(load_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config["LOG_LEVEL"])

    app.extensions["ipfs_uploader"] = IPFSUploader(
        api_key=app.config["MORALIS_API_KEY"],
        api_url=app.config["MORALIS_API_URL"],
        timeout=app.config["UPSTREAM_TIMEOUT"],
        session=session,
    )
    if not app.config["MORALIS_API_KEY"]:
        logger.warning("MORALIS_API_KEY is not set; uploads will be rejected")

    app.register_blueprint(upload_bp)
    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(metrics_bp, url_prefix="/api")

    origins = app.config["CORS_ORIGINS"]
    CORS(
        app,
        origins=origins,
        methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        max_age=CORS_MAX_AGE,
        send_wildcard="*" in origins,
    )

    @app.before_request
    def _before():
        start_request()

    @app.after_request
    def _after(response):
        return end_request(response)

    @app.errorhandler(RequestEntityTooLarge)
    def _too_large(e):
        limit_mb = app.config["MAX_CONTENT_LENGTH"] / (1024 * 1024)
        return jsonify({"error": f"upload exceeds {limit_mb:g} MB limit"}), 413

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({"error": e.description}), e.code

    return app

def main():
    app = create_app()
    app.run(host=app.config["HOST"], port=app.config["PORT"])

if __name__ == "__main__":
    main()
