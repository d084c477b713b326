import pytest
import requests

from storefront.domain.errors import UpstreamFailure
from storefront.services import identity_client
from storefront.services.identity_client import IdentityClient


class _Resp:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self.ok = status_code < 400
        self._payload = payload

    def json(self):
        return self._payload


def _client():
    return IdentityClient(base_url="https://auth.test/", api_key="service-key", timeout=1)


def test_resolves_user(monkeypatch):
    calls = []

    def fake_get(url, headers, timeout):
        calls.append((url, headers))
        return _Resp(200, {"id": "u-1", "email": "a@b.c"})

    monkeypatch.setattr(identity_client.requests, "get", fake_get)
    user = _client().get_user("tok")

    assert user.id == "u-1"
    assert user.email == "a@b.c"
    assert calls[0][0] == "https://auth.test/auth/v1/user"
    assert calls[0][1]["Authorization"] == "Bearer tok"
    assert calls[0][1]["apikey"] == "service-key"


def test_rejected_token_is_none(monkeypatch):
    monkeypatch.setattr(identity_client.requests, "get", lambda *a, **kw: _Resp(401, {}))
    assert _client().get_user("tok") is None


def test_server_error_is_upstream_failure(monkeypatch):
    monkeypatch.setattr(identity_client.requests, "get", lambda *a, **kw: _Resp(503, {}))
    with pytest.raises(UpstreamFailure):
        _client().get_user("tok")


def test_transport_errors_are_retried(monkeypatch):
    attempts = []

    def flaky_get(*a, **kw):
        attempts.append(1)
        if len(attempts) < 2:
            raise requests.ConnectionError("reset")
        return _Resp(200, {"id": "u-2"})

    monkeypatch.setattr(identity_client.requests, "get", flaky_get)
    assert _client().get_user("tok").id == "u-2"
    assert len(attempts) == 2


def test_unconfigured_gateway():
    with pytest.raises(UpstreamFailure):
        IdentityClient(base_url="", api_key="").get_user("tok")
