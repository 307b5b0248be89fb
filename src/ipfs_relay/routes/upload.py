import json
import logging

from flask import Blueprint, current_app, g, jsonify, request

from ipfs_relay.observability.metrics import inc
from ipfs_relay.services.ipfs import UploadError, prepare_file, prepare_files

upload_bp = Blueprint("upload", __name__)

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "IPFS upload successful"
MISSING_KEY_MESSAGE = "MORALIS_API_KEY must be set"


def get_uploader():
    return current_app.extensions["ipfs_uploader"]


def error(message, status):
    return jsonify({"error": message}), status


def indented_json(body, status):
    return current_app.response_class(
        json.dumps(body, indent=4) + "\n",
        status=status,
        mimetype="application/json",
    )


def is_multipart():
    return request.mimetype == "multipart/form-data"


def forward(ipfs_files):
    """Send prepared files upstream; UploadError propagates to the caller."""
    try:
        paths = get_uploader().upload(ipfs_files)
    except UploadError:
        inc("upstream_errors")
        raise
    inc("files_uploaded", len(paths))
    return paths


@upload_bp.route("/upload-file", methods=["POST"])
def upload_file():
    inc("upload_requests")
    if not get_uploader().configured:
        inc("upload_failures")
        return error(MISSING_KEY_MESSAGE, 400)

    if not is_multipart():
        inc("upload_failures")
        return error("failed to parse file: request Content-Type isn't multipart/form-data", 400)

    storage = request.files.get("file")
    if storage is None or not storage.filename:
        inc("upload_failures")
        return error("failed to parse file: no such file in form field 'file'", 400)
    inc("files_received")

    try:
        ipfs_file = prepare_file(storage)
    except UploadError as e:
        inc("upload_failures")
        return error(f"failed to prepare file for upload: {e}", 500)

    try:
        paths = forward([ipfs_file])
    except UploadError as e:
        inc("upload_failures")
        logger.error("[%s] upload of %s failed: %s", g.get("request_id"), storage.filename, e)
        return error(str(e), 500)

    return indented_json({"message": SUCCESS_MESSAGE, "path": paths[0]}, 201)


@upload_bp.route("/upload-files", methods=["POST"])
def upload_files():
    inc("upload_requests")
    if not get_uploader().configured:
        inc("upload_failures")
        return error(MISSING_KEY_MESSAGE, 400)

    if not is_multipart():
        inc("upload_failures")
        return error("failed to parse form: request Content-Type isn't multipart/form-data", 400)

    files = [f for f in request.files.getlist("files") if f.filename]
    if not files:
        inc("upload_failures")
        return error("no files provided", 400)
    inc("files_received", len(files))

    try:
        ipfs_files = prepare_files(files)
    except UploadError as e:
        inc("upload_failures")
        return error(f"failed to prepare files for upload: {e}", 500)

    try:
        paths = forward(ipfs_files)
    except UploadError as e:
        inc("upload_failures")
        logger.error("[%s] batch upload of %d files failed: %s", g.get("request_id"), len(ipfs_files), e)
        return error(str(e), 500)

    logger.info("[%s] uploaded %d files", g.get("request_id"), len(paths))
    return indented_json({"message": SUCCESS_MESSAGE, "paths": paths}, 201)
