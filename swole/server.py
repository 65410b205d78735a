"""A small WSGI demo server that starts and finishes one experiment."""

from __future__ import annotations

import argparse
import sys
from wsgiref.simple_server import make_server

from swole.experiment import Alternative, Experiment
from swole.manager import ExperimentManager

DEFAULT_KEY = "test_experiment"
DEFAULT_PORT = 3000


def _respond(start_response, status, body, headers, head_only):
    payload = body.encode("utf-8")
    start_response(status, [
        *headers,
        ("Content-Type", "text/plain; charset=utf-8"),
        ("Content-Length", str(len(payload))),
    ])
    return [b"" if head_only else payload]


def make_app(manager: ExperimentManager, key: str):
    """WSGI app: ``/finish`` finishes the experiment, every other path starts it."""

    def app(environ, start_response):
        method = environ.get("REQUEST_METHOD", "GET").upper()
        if method not in ("GET", "HEAD"):
            return _respond(start_response, "405 Method Not Allowed",
                            "Method Not Allowed\n", [("Allow", "GET, HEAD")], False)
        head_only = method == "HEAD"
        finishing = (environ.get("PATH_INFO") or "/") == "/finish"
        cookie_header = environ.get("HTTP_COOKIE")
        headers: list[tuple[str, str]] = []
        try:
            if finishing:
                res = manager.finish_experiment(key, headers, cookie_header)
                fields = (("DidFinish", res.did_finish),
                          ("DidFinishFirstTime", res.did_finish_first_time))
            else:
                res = manager.start_experiment(key, headers, cookie_header)
                fields = (("DidStart", res.did_start),
                          ("DidStartFirstTime", res.did_start_first_time))
        except (LookupError, ValueError) as exc:
            action = "finishExperiment" if finishing else "startExperiment"
            print(f"{action} {exc}", file=sys.stderr)
            return _respond(start_response, "500 Internal Server Error",
                            "Internal Server Error\n", [], head_only)
        described = " ".join(f"{name}:{str(flag).lower()}" for name, flag in fields)
        body = (f"The experiment {'finish' if finishing else 'start'} response is: "
                f"&{{{described} Alternative:{res.alternative}}}")
        return _respond(start_response, "200 OK", body, headers, head_only)

    return app


def main(argv: list[str] | None = None) -> int:
    """Serve the demo app until interrupted."""
    parser = argparse.ArgumentParser(description="Run the experiment demo server.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    manager = ExperimentManager()
    manager.register_experiment(
        Experiment(DEFAULT_KEY, [Alternative("control"), Alternative("variant")])
    )
    with make_server(args.host, args.port, make_app(manager, DEFAULT_KEY)) as server:
        print(f"Server is running on port :{args.port}")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())