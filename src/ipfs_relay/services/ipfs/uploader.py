import base64
import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://deep-index.moralis.io/api/v2/ipfs/uploadFolder"
DEFAULT_TIMEOUT = 30.0


class UploadError(RuntimeError):
    """Raised when files cannot be prepared or the pinning API rejects them."""


class IPFSFile:
    __slots__ = ("path", "content")

    def __init__(self, path: str, content: str):
        self.path = path
        self.content = content

    def to_dict(self) -> dict:
        return {"path": self.path, "content": self.content}

    def __repr__(self):
        return f"IPFSFile(path={self.path!r}, content=<{len(self.content)} chars>)"


def prepare_file(storage) -> IPFSFile:
    """
    Read an uploaded file fully and base64-encode it.
    The client-supplied filename becomes the IPFS path.
    """
    try:
        data = storage.read()
    except (OSError, ValueError) as e:
        raise UploadError("failed to read file") from e

    return IPFSFile(path=storage.filename, content=base64.b64encode(data).decode("ascii"))


def prepare_files(storages) -> list:
    """
    Prepare every upload, skipping the ones that cannot be read.
    Raises UploadError when nothing is left to send.
    """
    ipfs_files = []
    for storage in storages:
        try:
            ipfs_files.append(prepare_file(storage))
        except UploadError as e:
            logger.warning("Skipping %s: %s", storage.filename, e)
            continue

    if not ipfs_files:
        raise UploadError("no valid files to upload")
    return ipfs_files


def parse_paths(body) -> list:
    """Extract the `path` of every entry in an uploadFolder response array."""
    if not isinstance(body, list):
        raise TypeError(f"expected a JSON array, got {type(body).__name__}")

    paths = []
    for item in body:
        if not isinstance(item, dict):
            raise TypeError(f"expected an object, got {type(item).__name__}")
        path = item["path"]
        if not isinstance(path, str):
            raise TypeError(f"path must be a string, got {type(path).__name__}")
        paths.append(path)
    return paths


class IPFSUploader:
    """Client for the Moralis IPFS uploadFolder endpoint."""

    def __init__(self, api_key: str, api_url: str = DEFAULT_API_URL,
                 timeout: float = DEFAULT_TIMEOUT, session=None):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def upload(self, ipfs_files) -> list:
        """
        POST the batch as a JSON array and return the content-addressed
        path of each stored file, in the order the API reports them.
        """
        payload = [f.to_dict() for f in ipfs_files]
        headers = {
            "Content-Type": "application/json",
            "X-API-Key": self.api_key,
        }

        try:
            resp = self.session.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise UploadError(f"failed to make HTTP request: {e}") from e

        logger.info("Pinning API responded with status code %d", resp.status_code)
        logger.debug("Pinning API response data: %s", resp.text)

        if resp.status_code < 200 or resp.status_code >= 300:
            raise UploadError(f"API call failed with status code {resp.status_code}")

        try:
            paths = parse_paths(resp.json())
        except (ValueError, TypeError, KeyError) as e:
            raise UploadError(f"failed to parse IPFS response: {e}") from e

        if not paths:
            raise UploadError("no files were uploaded")
        return paths
