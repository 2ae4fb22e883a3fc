"""
Pytest configuration and shared fixtures.
"""

import json
import sys
from pathlib import Path
from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
from fastapi.testclient import TestClient
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

sys.path.insert(0, str(Path(__file__).parent))

from fake_server import RecordedRequest, TrackingStore, create_app

from mlflow_api import MlflowAPI, MlflowClient, SessionConfig

TRACKING_URI = "http://mlflow.test"


class TestClientAdapter(BaseAdapter):
    """Transport adapter that hands requests to an in-process ASGI app."""

    def __init__(self, client: TestClient, store: TrackingStore) -> None:
        super().__init__()
        self.client = client
        self.store = store

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        url = urlsplit(request.url)
        query = dict(parse_qsl(url.query))
        body = json.loads(request.body) if request.body else None
        self.store.requests.append(RecordedRequest(request.method, url.path.removeprefix("/api/2.0/mlflow"), query, body))

        answer = self.client.request(request.method, request.url, content=request.body, headers=dict(request.headers))

        response = requests.Response()
        response.status_code = answer.status_code
        response.headers = CaseInsensitiveDict(answer.headers)
        response._content = answer.content
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


class FailingAdapter(BaseAdapter):
    """Transport adapter that fails every request with a connection error."""

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        raise requests.ConnectionError(f"Connection refused: {request.url}")

    def close(self):
        pass


class CannedAdapter(BaseAdapter):
    """Transport adapter that answers every request with a fixed body."""

    def __init__(self, status_code: int, content: bytes) -> None:
        super().__init__()
        self.status_code = status_code
        self.content = content
        self.verify_values = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.verify_values.append(verify)
        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.content
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


def make_api(adapter: BaseAdapter) -> MlflowAPI:
    """Build an MlflowAPI whose session routes the test URI through ``adapter``."""
    session = requests.Session()
    session.mount(TRACKING_URI, adapter)
    return MlflowAPI(TRACKING_URI, session=session)


@pytest.fixture(autouse=True)
def clean_env_for_tests(monkeypatch):
    """Clear MLflow environment variables for test isolation.

    Ensures tests never pick up a tracking server, run or experiment from the
    developer's shell.
    """
    for name in (
        "MLFLOW_TRACKING_URI",
        "MLFLOW_RUN_ID",
        "MLFLOW_EXPERIMENT_NAME",
        "MLFLOW_EXPERIMENT_ID",
        "MLFLOW_HTTP_REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store():
    """Empty in-memory tracking server state."""
    return TrackingStore()


@pytest.fixture
def api(store):
    """MlflowAPI talking to the fake tracking server."""
    client = TestClient(create_app(store))
    with make_api(TestClientAdapter(client, store)) as api:
        yield api


@pytest.fixture
def client(api):
    """MlflowClient with a known user and no other configuration."""
    return MlflowClient(api, SessionConfig(user="tester"))


@pytest.fixture
def experiment_id(api):
    """Id of a freshly created experiment."""
    return api.create_experiment("exp-fixture")


@pytest.fixture
def failing_api():
    """MlflowAPI whose every request fails at the transport level."""
    with make_api(FailingAdapter()) as api:
        yield api


@pytest.fixture
def canned_api():
    """Factory for an MlflowAPI answering every request with a fixed body."""

    def factory(content: bytes, status_code: int = 200) -> MlflowAPI:
        return make_api(CannedAdapter(status_code, content))

    return factory
