"""A scripted JSON-RPC server that answers a fixed sequence of expected calls."""

from __future__ import annotations

import json
import logging
import threading
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

ParamsMatcher = Callable[[str | bytes | None], bool]

_WHITESPACE = " \t\n\r"
_JSON_CONTENT_TYPE = "application/json"
_TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

CODE_PARSE_ERROR = -32700
CODE_METHOD_NOT_FOUND = -32601
CODE_INVALID_PARAMS = -32602


class MockRPCError(Exception):
    """Raised or reported when the mock receives calls it did not expect."""


class NoMoreCallsError(MockRPCError):
    def __init__(self) -> None:
        super().__init__("no more calls")


class NoMatchingCallsError(MockRPCError):
    def __init__(self) -> None:
        super().__init__("no matching calls")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name}")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


def _as_text(raw: str | bytes | bytearray) -> str:
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw).decode("utf-8")
    return raw


def _is_nullish(params: str | bytes | None) -> bool:
    return params is None or _as_text(params) == "null"


def _canonical(raw: str | bytes) -> str:
    """Drop newlines, validate the JSON and remove whitespace outside strings."""
    text = _as_text(raw).replace("\n", "")
    json.loads(text, parse_constant=_reject_constant)
    out: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            out.append(ch)
        elif ch not in _WHITESPACE:
            out.append(ch)
    return "".join(out)


def any_params_matcher() -> ParamsMatcher:
    """A matcher that accepts any params."""
    return lambda params: True


def null_matcher() -> ParamsMatcher:
    """A matcher that accepts only absent or null params."""
    return _is_nullish


def json_params_matcher(expected: str | bytes | None) -> ParamsMatcher:
    """A matcher comparing params with expected as JSON text, ignoring whitespace.

    Key order and number spelling must agree. Absent or null expected params
    give a null matcher; expected text that is not JSON raises ValueError.
    """
    if _is_nullish(expected):
        return null_matcher()
    expected_text = _canonical(expected)

    def match(params: str | bytes | None) -> bool:
        if params is None:
            return False
        try:
            return _canonical(params) == expected_text
        except (ValueError, UnicodeDecodeError):
            return False

    return match


# Raw JSON scanning, keeping the source text of member values.

Members = dict[str, tuple[Any, str]]


def _skip(text: str, i: int) -> int:
    while i < len(text) and text[i] in _WHITESPACE:
        i += 1
    return i


def _expect(text: str, i: int, ch: str) -> None:
    if text[i : i + 1] != ch:
        raise ValueError(f"expected {ch!r} at offset {i}")


def _value(text: str, i: int) -> tuple[Any, str, int]:
    start = _skip(text, i)
    value, end = _DECODER.raw_decode(text, start)
    return value, text[start:end], end


def _object(text: str, i: int) -> tuple[Members | None, int]:
    i = _skip(text, i)
    if text.startswith("null", i):
        return None, i + 4
    _expect(text, i, "{")
    i = _skip(text, i + 1)
    members: Members = {}
    if text[i : i + 1] == "}":
        return members, i + 1
    while True:
        key, _, i = _value(text, i)
        if not isinstance(key, str):
            raise ValueError("object key must be a string")
        i = _skip(text, i)
        _expect(text, i, ":")
        value, raw, i = _value(text, i + 1)
        members[key.lower()] = (value, raw)
        i = _skip(text, i)
        if text[i : i + 1] == ",":
            i += 1
            continue
        _expect(text, i, "}")
        return members, i + 1


def _array(text: str, i: int) -> tuple[list[Members | None], int]:
    i = _skip(text, i)
    _expect(text, i, "[")
    i = _skip(text, i + 1)
    items: list[Members | None] = []
    if text[i : i + 1] == "]":
        return items, i + 1
    while True:
        item, i = _object(text, i)
        items.append(item)
        i = _skip(text, i)
        if text[i : i + 1] == ",":
            i += 1
            continue
        _expect(text, i, "]")
        return items, i + 1


def _member_str(members: Members, key: str) -> str:
    value, _ = members.get(key, (None, ""))
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected a string, got {value!r}")
    return value


@dataclass(frozen=True)
class _Request:
    id: Any
    method: str
    params: str | None

    @classmethod
    def from_members(cls, members: Members | None) -> _Request:
        members = members or {}
        params = members.get("params")
        return cls(
            id=members.get("id", (None, ""))[0],
            method=_member_str(members, "method"),
            params=params[1] if params is not None else None,
        )


def _parse_requests(text: str) -> list[_Request]:
    if text.startswith("["):
        items, end = _array(text, 0)
    else:
        single, end = _object(text, 0)
        items = [single]
    if _skip(text, end) != len(text):
        raise ValueError(f"invalid character after top-level value at offset {end}")
    return [_Request.from_members(item) for item in items]


@dataclass
class RpcCall:
    """One expected call and the answer to give it."""

    method: str
    params_matcher: ParamsMatcher = field(default_factory=null_matcher)
    result: Any = None
    err: str = ""
    err_code: int = 0

    @classmethod
    def _from_members(cls, members: Members | None) -> RpcCall:
        members = members or {}
        params = members.get("params")
        code, _ = members.get("errcode", (0, ""))
        if code is None:
            code = 0
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError(f"errCode: expected an integer, got {code!r}")
        return cls(
            method=_member_str(members, "method"),
            params_matcher=json_params_matcher(params[1] if params is not None else None),
            result=members.get("result", (None, ""))[0],
            err=_member_str(members, "err"),
            err_code=code,
        )


def _response(req_id: Any, result: Any) -> dict[str, Any]:
    return {"id": req_id, "jsonrpc": "2.0", "result": result, "error": None}


def _error_response(req_id: Any, code: int, err: object) -> dict[str, Any]:
    return {
        "id": req_id,
        "jsonrpc": "2.0",
        "result": None,
        "error": {"code": code, "message": str(err)},
    }


def _encode(payload: Any) -> bytes:
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    for ch, escape in (
        ("&", "\\u0026"),
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(ch, escape)
    return text.encode("utf-8")


class _Handler(BaseHTTPRequestHandler):
    server: _Server

    def _dispatch(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length > 0 else b""
        status, content_type, payload = self.server.mock.handle(self.command, body)
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = do_HEAD = do_OPTIONS = _dispatch

    def log_message(self, format: str, *args: Any) -> None:
        return


class _Server(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], mock: MockRPC) -> None:
        super().__init__(address, _Handler)
        self.mock = mock


class MockRPC:
    """An HTTP JSON-RPC server answering expected calls in order.

    Once a call is unexpected, the mock records the error and answers every
    later request with it.
    """

    def __init__(
        self,
        calls: Iterable[RpcCall] = (),
        logger: logging.Logger | None = None,
    ) -> None:
        self._calls: deque[RpcCall] = deque(calls)
        self._log = logger or logging.getLogger(__name__)
        self._error: MockRPCError | None = None
        self._lock = threading.Lock()
        self._server: _Server | None = None
        self._thread: threading.Thread | None = None

    @property
    def pending_calls(self) -> int:
        return len(self._calls)

    @property
    def error(self) -> MockRPCError | None:
        return self._error

    def load_expectations(self, path: str) -> None:
        """Append the calls described by a JSON array file of expectations."""
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
        try:
            items, _ = _array(text, 0)
            calls = [RpcCall._from_members(item) for item in items]
        except ValueError as exc:
            raise ValueError(f"failed to decode expectations file {path}: {exc}") from exc
        with self._lock:
            self._calls.extend(calls)

    def start(self) -> None:
        """Start serving on a free local port in a background thread."""
        if self._server is not None:
            raise RuntimeError("mock RPC server already started")
        self._server = _Server(("127.0.0.1", 0), self)
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Shut the server down and wait for it to finish."""
        server, thread = self._server, self._thread
        if server is None:
            return
        self._server = None
        self._thread = None
        server.shutdown()
        server.server_close()
        if thread is not None:
            thread.join()

    def __enter__(self) -> MockRPC:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def endpoint(self) -> str:
        """The URL the server listens on."""
        if self._server is None:
            raise RuntimeError("mock RPC server is not running")
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}"

    def assert_expectations(self) -> None:
        """Raise AssertionError if an unexpected call arrived or calls are left."""
        if self._error is not None:
            raise AssertionError(f"mock RPC error: {self._error}")
        if self._calls:
            raise AssertionError(f"{len(self._calls)} expected calls were not made")

    def handle(self, method: str, body: bytes | str) -> tuple[int, str, bytes]:
        """Answer one HTTP request; returns status, content type and body."""
        with self._lock:
            if self._error is not None:
                return self._json(_error_response(None, CODE_METHOD_NOT_FOUND, self._error))

            if method.upper() != "POST":
                self._log.warning("method not allowed: %s", method)
                return 405, _TEXT_CONTENT_TYPE, b"only POST requests are allowed\n"

            try:
                requests = _parse_requests(_as_text(body))
            except (ValueError, UnicodeDecodeError) as exc:
                self._log.warning("error unmarshalling request body: %s", exc)
                return self._json(_error_response(None, CODE_PARSE_ERROR, exc))

            responses = [self._answer(req) for req in requests]
            if len(responses) == 1:
                payload: Any = responses[0]
            else:
                payload = responses or None
            return self._json(payload)

    def _answer(self, req: _Request) -> dict[str, Any]:
        if not self._calls:
            self._error = NoMoreCallsError()
            return _error_response(req.id, CODE_METHOD_NOT_FOUND, self._error)

        call = self._calls.popleft()
        if call.method != req.method:
            self._log.warning("method mismatch: expected %s, got %s", call.method, req.method)
            self._error = NoMatchingCallsError()
            return _error_response(req.id, CODE_METHOD_NOT_FOUND, self._error)

        if not call.params_matcher(req.params):
            self._log.warning("params did not match for method %s", req.method)
            self._error = NoMatchingCallsError()
            return _error_response(req.id, CODE_INVALID_PARAMS, self._error)

        if call.err:
            return _error_response(req.id, call.err_code, call.err)
        return _response(req.id, call.result)

    def _json(self, payload: Any) -> tuple[int, str, bytes]:
        try:
            data = _encode(payload)
        except (TypeError, ValueError) as exc:
            self._log.warning("error marshalling response: %s", exc)
            return 500, _TEXT_CONTENT_TYPE, f"{exc}\n".encode("utf-8")
        return 200, _JSON_CONTENT_TYPE, data