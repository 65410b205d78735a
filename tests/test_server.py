from wsgiref.util import setup_testing_defaults

import pytest

from swole.experiment import Alternative, Experiment
from swole.manager import COOKIE_NAME, ExperimentManager
from swole.server import make_app

KEY = "test_experiment"
START = "The experiment start response is: "
FINISH = "The experiment finish response is: "


class FixedRandom:
    def random(self):
        return 0.0


@pytest.fixture
def app():
    manager = ExperimentManager(rng=FixedRandom())
    manager.register_experiment(
        Experiment(KEY, [Alternative("control"), Alternative("variant")])
    )
    return make_app(manager, KEY)


def _call(app, path="/", method="GET", cookie=None):
    environ = {}
    setup_testing_defaults(environ)
    environ["PATH_INFO"] = path
    environ["REQUEST_METHOD"] = method
    if cookie is not None:
        environ["HTTP_COOKIE"] = cookie
    captured = {}

    def start_response(status, headers, exc_info=None):
        captured["status"] = status
        captured["headers"] = headers

    body = b"".join(app(environ, start_response)).decode("utf-8")
    return captured["status"], captured["headers"], body


def _cookie_pair(headers):
    values = [v for n, v in headers if n == "Set-Cookie"]
    assert len(values) == 1
    pair = values[0].split(";")[0]
    assert pair.startswith(COOKIE_NAME + "=")
    return pair


def test_start_first_visit(app):
    status, headers, body = _call(app, "/")
    assert status == "200 OK"
    assert body == START + "&{DidStart:true DidStartFirstTime:true Alternative:control}"
    _cookie_pair(headers)


def test_any_path_starts(app):
    status, _, body = _call(app, "/anything")
    assert status == "200 OK"
    assert body.startswith(START)


def test_start_again_with_cookie(app):
    _, headers, _ = _call(app, "/")
    _, _, body = _call(app, "/", cookie=_cookie_pair(headers))
    assert body == START + "&{DidStart:true DidStartFirstTime:false Alternative:control}"


def test_finish_without_cookie(app):
    status, headers, body = _call(app, "/finish")
    assert status == "200 OK"
    assert body == FINISH + "&{DidFinish:false DidFinishFirstTime:false Alternative:control}"
    assert [n for n, _ in headers if n == "Set-Cookie"] == []


def test_start_then_finish_round_trip(app):
    _, started, _ = _call(app, "/")
    _, finished, body = _call(app, "/finish", cookie=_cookie_pair(started))
    assert body == FINISH + "&{DidFinish:true DidFinishFirstTime:true Alternative:control}"
    _, _, body = _call(app, "/finish", cookie=_cookie_pair(finished))
    assert body == FINISH + "&{DidFinish:true DidFinishFirstTime:false Alternative:control}"


def test_unregistered_key_is_server_error():
    app = make_app(ExperimentManager(), "missing")
    status, _, body = _call(app, "/")
    assert status == "500 Internal Server Error"
    assert body == "Internal Server Error\n"


def test_malformed_cookie_is_server_error(app):
    status, _, _ = _call(app, "/", cookie="swole=notjson")
    assert status == "500 Internal Server Error"


def test_post_not_allowed(app):
    status, headers, _ = _call(app, "/", method="POST")
    assert status == "405 Method Not Allowed"
    assert ("Allow", "GET, HEAD") in headers


def test_content_length_matches_body(app):
    _, headers, body = _call(app, "/")
    length = dict(headers)["Content-Length"]
    assert int(length) == len(body.encode("utf-8"))