import json
import threading

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from werkzeug.serving import make_server

from fake_service import create_app
from sentiment_predictor import SentimentPredictor


def make_response(status_code=200, body=b"", headers=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.headers = CaseInsensitiveDict(headers or {})
    response.encoding = "utf-8"
    return response


def json_response(payload, status_code=200):
    return make_response(
        status_code,
        json.dumps(payload).encode(),
        {"Content-Type": "application/json"},
    )


class DummySession:
    """Stands in for requests.Session; replays one response per post()."""

    def __init__(self, *responses, on_post=None):
        self._responses = list(responses)
        self.on_post = on_post
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.on_post is not None:
            self.on_post(url, kwargs)
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def predictor_with():
    def build(*responses, on_post=None):
        session = DummySession(*responses, on_post=on_post)
        return SentimentPredictor(session=session, endpoint="http://service.test/predict"), session

    return build


def _serve(app):
    server = make_server("127.0.0.1", 0, app)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server, thread


@pytest.fixture
def fake_service():
    server, thread = _serve(create_app())
    yield f"http://127.0.0.1:{server.server_port}/predict"
    server.shutdown()
    thread.join()


@pytest.fixture
def fake_service_without_graph():
    server, thread = _serve(create_app(with_graph=False))
    yield f"http://127.0.0.1:{server.server_port}/predict"
    server.shutdown()
    thread.join()
