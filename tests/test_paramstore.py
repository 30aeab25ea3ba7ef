import io
import json
from http import HTTPStatus
from wsgiref.util import setup_testing_defaults

import pytest

from practicekit.paramstore import (
    ParameterStore,
    StoredParameters,
    make_app,
    validate_parameter,
)


def _request(app, method, query="", body=b"", path="/parameters",
             content_type="application/x-www-form-urlencoded"):
    environ = {}
    setup_testing_defaults(environ)
    environ.update(
        {
            "REQUEST_METHOD": method,
            "PATH_INFO": path,
            "QUERY_STRING": query,
            "CONTENT_LENGTH": str(len(body)),
            "CONTENT_TYPE": content_type,
            "wsgi.input": io.BytesIO(body),
        }
    )
    captured = {}

    def start_response(status, headers):
        captured["status"] = int(status.split()[0])
        captured["headers"] = dict(headers)

    chunks = app(environ, start_response)
    return captured["status"], captured["headers"], b"".join(chunks)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("john.doe@example.com", True),
        ("user+tag@example.com", True),
        ("invalid-email", False),
        ("a@b.c", False),
        ("john.doe@example.com\n", False),
    ],
)
def test_validate_email(value, expected):
    assert validate_parameter("email", value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-15", True),
        ("2024-02-29", True),
        ("2023-02-29", False),
        ("2024-1-5", False),
        ("2024-13-01", False),
        ("15-01-2024", False),
        ("2024-01-15x", False),
    ],
)
def test_validate_date(value, expected):
    assert validate_parameter("date", value) is expected


def test_other_parameters_always_valid():
    assert validate_parameter("colour", "") is True
    assert validate_parameter("anything", "whatever") is True


def test_put_and_get_round_trip():
    store = ParameterStore()
    entry = store.put("a1", {"email": ["john.doe@example.com"], "date": "2024-01-15"})
    assert store.get("a1") == entry
    assert entry.params == {"email": "john.doe@example.com", "date": "2024-01-15"}
    assert entry.is_valid == {"email": True, "date": True}


def test_put_joins_multiple_values_before_validating():
    store = ParameterStore()
    entry = store.put("a1", {"email": ["x@example.com", "y@example.com"], "tag": ["p", "q"]})
    assert entry.params["email"] == "x@example.com, y@example.com"
    assert entry.is_valid["email"] is False
    assert entry.params["tag"] == "p, q"
    assert entry.is_valid["tag"] is True


def test_put_replaces_existing_entry():
    store = ParameterStore()
    store.put("a1", {"x": "1"})
    store.put("a1", {"y": "2"})
    assert store.get("a1").params == {"y": "2"}
    assert len(store) == 1


def test_get_missing_raises_key_error():
    with pytest.raises(KeyError):
        ParameterStore().get("missing")


def test_delete_removes_entry():
    store = ParameterStore()
    store.put("a1", {"x": "1"})
    store.delete("a1")
    assert "a1" not in store
    with pytest.raises(KeyError):
        store.delete("a1")


@pytest.mark.parametrize("op", ["get", "delete"])
def test_empty_id_rejected(op):
    with pytest.raises(ValueError, match="ID parameter is required"):
        getattr(ParameterStore(), op)("")


def test_put_empty_id_rejected():
    with pytest.raises(ValueError):
        ParameterStore().put("", {"x": "1"})


def test_to_dict_field_order_and_sorted_maps():
    entry = StoredParameters("a1", {"b": "2", "a": "1"}, {"b": True, "a": True})
    data = entry.to_dict()
    assert list(data) == ["id", "params", "is_valid"]
    assert list(data["params"]) == ["a", "b"]


def test_http_post_then_get():
    store = ParameterStore()
    app = make_app(store)
    status, headers, body = _request(
        app, "POST", "id=u1", b"email=john.doe%40example.com&date=2024-01-15"
    )
    assert status == HTTPStatus.CREATED
    assert headers["Content-Type"] == "application/json"
    assert json.loads(body) == {"message": "Parameters stored successfully"}

    status, _, body = _request(app, "GET", "id=u1")
    assert status == HTTPStatus.OK
    data = json.loads(body)
    assert data["id"] == "u1"
    assert data["params"]["email"] == "john.doe@example.com"
    assert data["is_valid"]["email"] is True
    assert data["is_valid"]["date"] is True
    # The query string is part of the form, as the id itself shows.
    assert data["params"]["id"] == "u1"


def test_http_body_values_precede_query_values():
    store = ParameterStore()
    app = make_app(store)
    _request(app, "POST", "id=u1&tag=q", b"tag=p")
    assert store.get("u1").params["tag"] == "p, q"


def test_http_invalid_values_marked():
    store = ParameterStore()
    app = make_app(store)
    _request(app, "POST", "id=u1", b"email=invalid-email")
    assert store.get("u1").is_valid["email"] is False


def test_http_missing_id():
    app = make_app()
    for method in ("GET", "POST", "DELETE"):
        status, _, body = _request(app, method)
        assert status == HTTPStatus.BAD_REQUEST
        assert body.decode().strip() == "ID parameter is required"


def test_http_get_unknown():
    status, _, body = _request(make_app(), "GET", "id=nope")
    assert status == HTTPStatus.NOT_FOUND
    assert body.decode().strip() == "Parameters not found"


def test_http_delete():
    store = ParameterStore()
    app = make_app(store)
    _request(app, "POST", "id=u1", b"x=1")
    status, _, body = _request(app, "DELETE", "id=u1")
    assert status == HTTPStatus.NO_CONTENT
    assert body == b""
    assert "u1" not in store
    status, _, _ = _request(app, "DELETE", "id=u1")
    assert status == HTTPStatus.NOT_FOUND


def test_http_method_not_allowed():
    status, _, body = _request(make_app(), "PUT", "id=u1")
    assert status == HTTPStatus.METHOD_NOT_ALLOWED
    assert body.decode().strip() == "Method not allowed"


def test_http_malformed_form():
    store = ParameterStore()
    status, _, body = _request(make_app(store), "POST", "id=u1", b"x=%zz")
    assert status == HTTPStatus.BAD_REQUEST
    assert body.decode().strip() == "Failed to parse form data"
    assert "u1" not in store


def test_http_unknown_path():
    status, _, _ = _request(make_app(), "GET", "id=u1", path="/other")
    assert status == HTTPStatus.NOT_FOUND