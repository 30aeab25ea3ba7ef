"""Storing request parameters by id with per-parameter validation, over HTTP."""

from __future__ import annotations

import argparse
import datetime
import json
import logging
import re
import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any
from urllib.parse import parse_qs, unquote_plus

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
VALUE_SEPARATOR = ", "

_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _is_valid_date(value: str) -> bool:
    match = _DATE_PATTERN.fullmatch(value)
    if match is None:
        return False
    year, month, day = (int(part) for part in match.groups())
    try:
        datetime.date(year, month, day)
    except ValueError:
        return False
    return True


def validate_parameter(name: str, value: str) -> bool:
    """Return whether ``value`` is acceptable for the parameter ``name``.

    ``email`` must look like an e-mail address and ``date`` must be a
    ``YYYY-MM-DD`` calendar date; every other parameter is accepted.
    """
    if name == "email":
        return _EMAIL_PATTERN.fullmatch(value) is not None
    if name == "date":
        return _is_valid_date(value)
    return True


@dataclass(frozen=True)
class StoredParameters:
    """The parameters stored under one id, with the result of validating each."""

    id: str
    params: dict[str, str] = field(default_factory=dict)
    is_valid: dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, with maps in key order."""
        return {
            "id": self.id,
            "params": dict(sorted(self.params.items())),
            "is_valid": dict(sorted(self.is_valid.items())),
        }


def _values(raw: str | Iterable[str]) -> list[str]:
    if isinstance(raw, str):
        return [raw]
    return list(raw)


class ParameterStore:
    """A thread-safe in-memory store of validated parameters keyed by id."""

    def __init__(self) -> None:
        self._entries: dict[str, StoredParameters] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _require_id(param_id: str) -> None:
        if not param_id:
            raise ValueError("ID parameter is required")

    def put(self, param_id: str, form: Mapping[str, str | Iterable[str]]) -> StoredParameters:
        """Validate and store ``form`` under ``param_id``, replacing any earlier entry.

        Several values of one parameter are joined with ``", "`` before they
        are validated.
        """
        self._require_id(param_id)
        params = {key: VALUE_SEPARATOR.join(_values(raw)) for key, raw in form.items()}
        is_valid = {key: validate_parameter(key, value) for key, value in params.items()}
        entry = StoredParameters(param_id, params, is_valid)
        with self._lock:
            self._entries[param_id] = entry
        logger.info("Stored parameters for ID %s", param_id)
        return entry

    def get(self, param_id: str) -> StoredParameters:
        """Return the entry stored under ``param_id``; KeyError if there is none."""
        self._require_id(param_id)
        with self._lock:
            try:
                return self._entries[param_id]
            except KeyError:
                raise KeyError(param_id) from None

    def delete(self, param_id: str) -> None:
        """Remove the entry stored under ``param_id``; KeyError if there is none."""
        self._require_id(param_id)
        with self._lock:
            if param_id not in self._entries:
                raise KeyError(param_id)
            del self._entries[param_id]
        logger.info("Deleted parameters for ID %s", param_id)

    def __contains__(self, param_id: object) -> bool:
        with self._lock:
            return param_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _parse_form(query: str) -> dict[str, list[str]]:
    """Parse URL-encoded pairs strictly, rejecting malformed escapes and ';'."""
    result: dict[str, list[str]] = {}
    for part in query.split("&"):
        if not part:
            continue
        if ";" in part:
            raise ValueError("invalid semicolon separator in query")
        key, _, value = part.partition("=")
        if _BAD_ESCAPE.search(key) or _BAD_ESCAPE.search(value):
            raise ValueError(f"invalid URL escape in {part!r}")
        result.setdefault(unquote_plus(key), []).append(unquote_plus(value))
    return result


def _read_body(environ: Mapping[str, Any]) -> bytes:
    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    if length <= 0:
        return b""
    return environ["wsgi.input"].read(length)


StartResponse = Callable[[str, list[tuple[str, str]]], Any]


def _status_line(status: HTTPStatus) -> str:
    return f"{status.value} {status.phrase}"


def _text(start_response: StartResponse, status: HTTPStatus, message: str) -> list[bytes]:
    body = (message + "\n").encode("utf-8")
    start_response(
        _status_line(status),
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


def _json(start_response: StartResponse, status: HTTPStatus, data: Any) -> list[bytes]:
    body = (json.dumps(data, separators=(",", ":"), ensure_ascii=False) + "\n").encode("utf-8")
    start_response(
        _status_line(status),
        [("Content-Type", "application/json"), ("Content-Length", str(len(body)))],
    )
    return [body]


def make_app(store: ParameterStore | None = None) -> Callable[..., Iterator[bytes] | list[bytes]]:
    """Return a WSGI application serving ``/parameters`` from ``store``."""
    store = store if store is not None else ParameterStore()

    def handle_get(param_id: str, start_response: StartResponse) -> list[bytes]:
        try:
            entry = store.get(param_id)
        except KeyError:
            return _text(start_response, HTTPStatus.NOT_FOUND, "Parameters not found")
        return _json(start_response, HTTPStatus.OK, entry.to_dict())

    def handle_post(
        param_id: str, environ: Mapping[str, Any], start_response: StartResponse
    ) -> list[bytes]:
        content_type = environ.get("CONTENT_TYPE", "").split(";")[0].strip().lower()
        try:
            form: dict[str, list[str]] = {}
            if content_type == "application/x-www-form-urlencoded":
                form = _parse_form(_read_body(environ).decode("utf-8", "replace"))
            for key, values in _parse_form(environ.get("QUERY_STRING", "")).items():
                form.setdefault(key, []).extend(values)
        except ValueError:
            return _text(start_response, HTTPStatus.BAD_REQUEST, "Failed to parse form data")
        store.put(param_id, form)
        return _json(
            start_response,
            HTTPStatus.CREATED,
            {"message": "Parameters stored successfully"},
        )

    def handle_delete(param_id: str, start_response: StartResponse) -> list[bytes]:
        try:
            store.delete(param_id)
        except KeyError:
            return _text(start_response, HTTPStatus.NOT_FOUND, "Parameters not found")
        start_response(_status_line(HTTPStatus.NO_CONTENT), [])
        return []

    def app(environ: Mapping[str, Any], start_response: StartResponse) -> list[bytes]:
        if environ.get("PATH_INFO", "") != "/parameters":
            return _text(start_response, HTTPStatus.NOT_FOUND, "404 page not found")
        method = environ.get("REQUEST_METHOD", "GET").upper()
        if method not in ("GET", "POST", "DELETE"):
            return _text(start_response, HTTPStatus.METHOD_NOT_ALLOWED, "Method not allowed")
        query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
        param_id = query.get("id", [""])[0]
        if not param_id:
            return _text(start_response, HTTPStatus.BAD_REQUEST, "ID parameter is required")
        if method == "GET":
            return handle_get(param_id, start_response)
        if method == "POST":
            return handle_post(param_id, environ, start_response)
        return handle_delete(param_id, start_response)

    return app


def main(argv: list[str] | None = None) -> int:
    """Serve the parameter store over HTTP until interrupted."""
    from wsgiref.simple_server import make_server

    parser = argparse.ArgumentParser(description="Serve the parameter store over HTTP.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    with make_server(args.host, args.port, make_app()) as server:
        logger.info("Server started on port %d...", args.port)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0