# Entry point for WSGI servers and function hosts that import a module-level app.
from ipfs_relay.app import create_app

app = create_app()
