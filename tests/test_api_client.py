import json
from unittest.mock import MagicMock

import pytest
import requests

from api_client import DashboardAPI, LOGIN_FALLBACK, UPLOAD_TIMEOUT
from errors import ApiError, AuthError, NetworkError
from session_gate import SESSION_EXPIRED, SessionContext, SessionGate, TOKEN_KEY


def _response(status=200, payload=None, content=None, reason="OK"):
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    if payload is not None:
        resp._content = json.dumps(payload).encode("utf-8")
    else:
        resp._content = content or b""
    return resp


def _api(token="tok", on_unauthorized=None):
    session = MagicMock(spec=requests.Session)
    api = DashboardAPI(
        base_url="http://server:5000/",
        token_provider=lambda: token,
        on_unauthorized=on_unauthorized,
        session=session,
    )
    return api, session


def test_list_records_sends_bearer_token_and_normalizes():
    api, session = _api()
    session.request.return_value = _response(payload=[{"_id": "a", "hasAttachment": True}, "junk"])

    records = api.list_records()

    assert [r.id for r in records] == ["a"]
    method, url = session.request.call_args.args
    assert (method, url) == ("GET", "http://server:5000/api/resumes")
    assert session.request.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}


def test_unauthorized_calls_hook_and_raises():
    hook = MagicMock()
    api, session = _api(on_unauthorized=hook)
    session.request.return_value = _response(401, {"error": "Invalid token"}, reason="Unauthorized")

    with pytest.raises(AuthError):
        api.record_stats()
    hook.assert_called_once_with()


def test_unauthorized_clears_stored_session(kv_store):
    api, session = _api()
    context = SessionContext(kv_store)
    context.save("tok", None)
    api.token_provider = lambda: context.token
    gate = SessionGate(context=context, api=api)
    api.on_unauthorized = gate.expire
    session.request.return_value = _response(401, reason="Unauthorized")

    with pytest.raises(AuthError):
        api.list_records()

    assert kv_store.get(TOKEN_KEY) is None
    assert gate.error == SESSION_EXPIRED
    assert not gate.is_authenticated


def test_timeout_maps_to_network_error():
    api, session = _api()
    session.request.side_effect = requests.Timeout("slow")
    with pytest.raises(NetworkError, match="timed out"):
        api.list_records()


def test_server_error_message_is_surfaced():
    api, session = _api()
    session.request.return_value = _response(500, {"error": "boom"}, reason="Server Error")
    with pytest.raises(ApiError, match="boom") as info:
        api.delete_record("abc")
    assert info.value.status == 500
    assert session.request.call_args.args == ("DELETE", "http://server:5000/api/resumes/abc")


def test_server_error_without_body_uses_fallback():
    api, session = _api()
    session.request.return_value = _response(500, content=b"<html>", reason="Server Error")
    with pytest.raises(ApiError, match="Failed to update resume details"):
        api.update_details("abc", {"name": "Ann"})


def test_login_failure_messages():
    api, session = _api()
    session.post.return_value = _response(401, {"message": "Invalid credentials"}, reason="Unauthorized")
    with pytest.raises(AuthError, match="Invalid credentials"):
        api.login("admin", "bad")

    session.post.return_value = _response(500, content=b"", reason="Server Error")
    with pytest.raises(AuthError, match=LOGIN_FALLBACK.split(".")[0]):
        api.login("admin", "bad")


def test_login_success():
    api, session = _api()
    session.post.return_value = _response(payload={"token": "new", "admin": {"username": "root"}})
    result = api.login("root", "pw")
    assert result.token == "new"
    assert result.admin.username == "root"


def test_upload_uses_resumes_field_and_long_timeout():
    api, session = _api()
    session.request.return_value = _response(payload={"results": [
        {"file": "a.pdf", "status": "success"},
        {"file": "b.pdf", "status": "error", "error": "Parse failed"},
    ]})

    response = api.upload([("a.pdf", b"%PDF-a"), ("b.pdf", b"%PDF-b")])

    assert [r.ok for r in response.results] == [True, False]
    kwargs = session.request.call_args.kwargs
    assert kwargs["timeout"] == UPLOAD_TIMEOUT
    assert [field for field, _ in kwargs["files"]] == ["resumes", "resumes"]


def test_download_errors():
    api, session = _api()
    session.get.return_value = _response(200, content=b"")
    with pytest.raises(ApiError, match="Downloaded file is empty"):
        api.download("abc")

    session.get.return_value = _response(404, content=b"", reason="Not Found")
    with pytest.raises(ApiError, match="HTTP 404: Not Found"):
        api.download("abc")


def test_download_returns_bytes():
    api, session = _api()
    session.get.return_value = _response(200, content=b"%PDF-1.4")
    assert api.download("abc") == b"%PDF-1.4"


def test_health():
    api, session = _api()
    session.get.return_value = _response(200, payload={"status": "ok"})
    assert api.health() is True
    session.get.side_effect = requests.ConnectionError("down")
    assert api.health() is False


def test_birthdays_and_mailbox_url():
    api, session = _api()
    session.request.return_value = _response(payload={"birthdays": [{"name": "Ann", "contactNumber": "+1 555"}]})
    people = api.birthdays_today()
    assert people[0].contact_number == "+1 555"
    assert api.mailbox_connect_url() == "http://server:5000/api/outlook-auth/login"
