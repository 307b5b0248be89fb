"""Environment-driven settings for the relay."""
import os

from dotenv import find_dotenv, load_dotenv

from ipfs_relay.services.ipfs import DEFAULT_API_URL, DEFAULT_TIMEOUT

DEFAULT_PORT = 8080
DEFAULT_MAX_UPLOAD_MB = 100


def _split_origins(value):
    origins = [o.strip() for o in (value or "").split(",") if o.strip()]
    return origins or ["*"]


def load_config(env=None) -> dict:
    """
    Build the Flask config mapping from the process environment.
    A .env file in the working directory fills in anything not already set.
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        env = os.environ

    # blank values in .env fall back to the defaults
    max_upload_mb = float(env.get("MAX_UPLOAD_MB") or DEFAULT_MAX_UPLOAD_MB)

    return {
        "MORALIS_API_KEY": env.get("MORALIS_API_KEY") or "",
        "MORALIS_API_URL": env.get("MORALIS_API_URL") or DEFAULT_API_URL,
        "UPSTREAM_TIMEOUT": float(env.get("UPSTREAM_TIMEOUT") or DEFAULT_TIMEOUT),
        "MAX_CONTENT_LENGTH": int(max_upload_mb * 1024 * 1024),
        "CORS_ORIGINS": _split_origins(env.get("CORS_ORIGINS")),
        "HOST": env.get("HOST") or "0.0.0.0",
        "PORT": int(env.get("PORT") or DEFAULT_PORT),
        "LOG_LEVEL": (env.get("LOG_LEVEL") or "INFO").upper(),
    }
