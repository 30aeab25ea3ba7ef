"""Small HTTP handlers: a JSON message file, video settings and playback controls."""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Callable, Mapping, Sequence
from http import HTTPStatus
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_DATA_PATH = "data.json"
VIDEO_DEFAULTS: Mapping[str, str] = {
    "speed": "1.0",
    "resolution": "1080p",
    "tutorial": "basic",
}

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

StartResponse = Callable[[str, list[tuple[str, str]]], Any]
Query = Mapping[str, "str | Sequence[str]"]


def _encode(data: Any) -> str:
    """Encode ``data`` as compact JSON with HTML-sensitive characters escaped."""
    text = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return "".join(_JSON_ESCAPES.get(ch, ch) for ch in text)


def _message_from(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, dict):
        raise ValueError("expected a JSON object")
    message = value.get("message")
    if message is None:
        return ""
    if not isinstance(message, str):
        raise ValueError("message must be a string")
    return message


def write_message(path: str | Path, body: bytes | str) -> str:
    """Decode a ``{"message": ...}`` request body and store it as JSON at ``path``.

    Only the first JSON value of the body is read. Returns the stored message;
    raises ValueError for a body that is not such an object.
    """
    text = body.decode("utf-8", "replace") if isinstance(body, bytes) else body
    stripped = text.lstrip()
    if not stripped:
        raise ValueError("empty request body")
    value, _ = json.JSONDecoder().raw_decode(stripped)
    message = _message_from(value)
    Path(path).write_text(_encode({"message": message}), encoding="utf-8")
    return message


def read_message(path: str | Path) -> str:
    """Return the message stored as JSON at ``path``.

    Raises OSError if the file cannot be read and ValueError if it does not
    hold a message object.
    """
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return _message_from(json.loads(text))


def _first(query: Query, key: str) -> str:
    raw = query.get(key)
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return next(iter(raw), "")


def video_settings(query: Query) -> dict[str, str]:
    """Return the speed, resolution and tutorial asked for, with defaults for blanks."""
    return {key: _first(query, key) or default for key, default in VIDEO_DEFAULTS.items()}


def playback_response(action: str, seek: str = "") -> str:
    """Return the reply to a playback command; ValueError for an unknown action."""
    if action == "play":
        return "Play command received.\n"
    if action == "pause":
        return "Pause command received.\n"
    if action == "forward":
        return f"Fast-forward by {seek} seconds.\n"
    if action == "rewind":
        return f"Rewind by {seek} seconds.\n"
    raise ValueError("Invalid action")


def _status_line(status: HTTPStatus) -> str:
    return f"{status.value} {status.phrase}"


def _reply(start_response: StartResponse, status: HTTPStatus, text: str) -> list[bytes]:
    body = text.encode("utf-8")
    start_response(
        _status_line(status),
        [("Content-Type", "text/plain; charset=utf-8"), ("Content-Length", str(len(body)))],
    )
    return [body]


def _error(start_response: StartResponse, status: HTTPStatus, message: str) -> list[bytes]:
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


def _read_body(environ: Mapping[str, Any]) -> bytes:
    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    if length <= 0:
        return b""
    return environ["wsgi.input"].read(length)


def make_app(data_path: str | Path = DEFAULT_DATA_PATH) -> Callable[..., list[bytes]]:
    """Return a WSGI application serving ``/write``, ``/read``, ``/video`` and ``/playback``."""

    def handle_write(environ: Mapping[str, Any], start_response: StartResponse) -> list[bytes]:
        if environ.get("REQUEST_METHOD", "GET").upper() != "POST":
            return _error(
                start_response, HTTPStatus.METHOD_NOT_ALLOWED, "Only POST method is supported"
            )
        try:
            write_message(data_path, _read_body(environ))
        except ValueError:
            return _error(start_response, HTTPStatus.BAD_REQUEST, "Invalid request body")
        except OSError:
            logger.exception("Could not write %s", data_path)
            return _error(start_response, HTTPStatus.INTERNAL_SERVER_ERROR, "Could not create file")
        return _reply(start_response, HTTPStatus.OK, "Data written to file successfully")

    def handle_read(environ: Mapping[str, Any], start_response: StartResponse) -> list[bytes]:
        if environ.get("REQUEST_METHOD", "GET").upper() != "GET":
            return _error(
                start_response, HTTPStatus.METHOD_NOT_ALLOWED, "Only GET method is supported"
            )
        try:
            message = read_message(data_path)
        except OSError:
            return _error(start_response, HTTPStatus.INTERNAL_SERVER_ERROR, "Could not read file")
        except ValueError:
            return _error(
                start_response, HTTPStatus.INTERNAL_SERVER_ERROR, "Could not unmarshal data"
            )
        return _reply(start_response, HTTPStatus.OK, _encode({"message": message}) + "\n")

    def handle_video(query: Query, start_response: StartResponse) -> list[bytes]:
        settings = video_settings(query)
        text = (
            f"Playback Speed: {settings['speed']}\n"
            f"Resolution: {settings['resolution']}\n"
            f"Tutorial: {settings['tutorial']}\n"
        )
        return _reply(start_response, HTTPStatus.OK, text)

    def handle_playback(query: Query, start_response: StartResponse) -> list[bytes]:
        try:
            text = playback_response(_first(query, "action"), _first(query, "seek"))
        except ValueError as exc:
            return _error(start_response, HTTPStatus.BAD_REQUEST, str(exc))
        return _reply(start_response, HTTPStatus.OK, text)

    def app(environ: Mapping[str, Any], start_response: StartResponse) -> list[bytes]:
        path = environ.get("PATH_INFO", "")
        query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
        if path == "/write":
            return handle_write(environ, start_response)
        if path == "/read":
            return handle_read(environ, start_response)
        if path == "/video":
            return handle_video(query, start_response)
        if path == "/playback":
            return handle_playback(query, start_response)
        return _error(start_response, HTTPStatus.NOT_FOUND, "404 page not found")

    return app


def main(argv: list[str] | None = None) -> int:
    """Serve the handlers over HTTP until interrupted."""
    from wsgiref.simple_server import make_server

    parser = argparse.ArgumentParser(description="Serve the message and video handlers.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--data", default=DEFAULT_DATA_PATH, help="JSON file for messages")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    with make_server(args.host, args.port, make_app(args.data)) as server:
        logger.info("Listening on port %d", args.port)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0