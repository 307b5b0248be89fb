"""Relay that pins uploaded files to IPFS through the Moralis API."""
from ipfs_relay.app import create_app

__all__ = ["create_app"]
__version__ = "0.1.0"
