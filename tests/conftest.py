import json

import pytest

from ipfs_relay import create_app
from ipfs_relay.observability.metrics import reset

TEST_API_KEY = "test-moralis-key"
TEST_API_URL = "https://pinning.test/api/v2/ipfs/uploadFolder"


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; records every POST it receives."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        if self.response is not None:
            return self.response
        # echo back one IPFS path per submitted file
        return FakeResponse(201, [
            {"path": f"https://ipfs.moralis.io:2053/ipfs/QmTestHash/{item['path']}"}
            for item in json
        ])


@pytest.fixture(autouse=True)
def reset_metrics():
    reset()
    yield
    reset()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def make_app():
    def _make(session=None, **overrides):
        config = {
            "TESTING": True,
            "MORALIS_API_KEY": TEST_API_KEY,
            "MORALIS_API_URL": TEST_API_URL,
            "CORS_ORIGINS": ["*"],
        }
        config.update(overrides)
        return create_app(config, session=session or FakeSession())
    return _make


@pytest.fixture
def app(make_app, session):
    return make_app(session=session)


@pytest.fixture
def client(app):
    return app.test_client()
