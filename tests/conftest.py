"""Shared fixtures for htclient tests."""

import json
import socket
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
from htclient.http import NO_STATUS, DataTask, reset_shared_session


class FakeSession:
    """In-memory engine that answers every request with a canned outcome."""

    def __init__(self, status=200, body=b"ok", error=None):
        self.status = status
        self.body = body
        self.error = error
        self.submitted = []
        self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="fake-engine-")

    def submit(self, request, completion):
        self.submitted.append(request)
        task = DataTask(request, completion)
        task._bind(self._executor.submit(self._respond, task))
        return task

    def _respond(self, task):
        if self.error is not None:
            task._finish(None, NO_STATUS, self.error)
        else:
            task._finish(self.body, self.status, None)

    def close(self):
        self._executor.shutdown(wait=True)


class CallbackRecorder:
    """Completion handler that records every invocation."""

    def __init__(self):
        self.calls = []
        self.threads = []
        self.event = threading.Event()

    def __call__(self, body, status_code, error):
        self.calls.append((body, status_code, error))
        self.threads.append(threading.current_thread().name)
        self.event.set()

    def wait(self, timeout=5.0):
        return self.event.wait(timeout)


class _EchoHandler(BaseHTTPRequestHandler):
    """Echoes the request back as JSON; /status/<code> answers with that code."""

    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""

        if self.path.startswith("/slow"):
            time.sleep(2)

        status = 200
        if self.path.startswith("/status/"):
            status = int(self.path.rsplit("/", 1)[1])

        payload = json.dumps(
            {
                "method": self.command,
                "path": self.path,
                "headers": dict(self.headers),
                "body": body.decode("utf-8", errors="replace"),
            }
        ).encode()

        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(payload)

    do_GET = _handle
    do_POST = _handle
    do_PUT = _handle
    do_DELETE = _handle
    do_PATCH = _handle
    do_HEAD = _handle

    def log_message(self, format, *args):
        pass


@pytest.fixture
def fake_session():
    """Fake engine returning 200 / b"ok"."""
    session = FakeSession()
    yield session
    session.close()


@pytest.fixture
def recorder():
    return CallbackRecorder()


@pytest.fixture
def http_server():
    """Local echo server; yields its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _EchoHandler)
    server.daemon_threads = True
    server.block_on_close = False
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()
    thread.join()


@pytest.fixture
def closed_port_url():
    """URL pointing at a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/"


@pytest.fixture(autouse=True)
def _reset_shared_session():
    yield
    reset_shared_session()
